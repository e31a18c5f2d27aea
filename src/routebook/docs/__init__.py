"""Documentation rendering: Markdown and structured JSON views of a service.

Both renderers are pure projections of a ``Service``: they read the
route list and never mutate it, so they are safe to call from
concurrent request handlers.
"""

from routebook.docs.jsondoc import render_json, route_to_dict
from routebook.docs.markdown import render_markdown

__all__ = ["render_json", "render_markdown", "route_to_dict"]
