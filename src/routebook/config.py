"""Documentation configuration.

DocConfig is a frozen dataclass and cannot change after creation.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DocConfig:
    """Settings for the implicit endpoints and rendered samples.

    All fields have sensible defaults. Override what you need::

        config = DocConfig(health_body="healthy", json_indent=4)
    """

    # Implicit endpoints, relative to the service root
    markdown_path: str = "/md"
    json_path: str = "/jsondoc"
    health_path: str = "/health"
    health_body: str = "OK"

    # Sample rendering
    json_indent: int = 2
    sample_prefix: str = " " * 8  # Continuation-line indent inside fenced blocks
