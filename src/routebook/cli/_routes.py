"""``routebook routes``: list the dispatch table.

Binds the service into a fresh router and prints METHOD, PATH, and
handler name for every binding, implicit endpoints included.
"""

import argparse
import sys

from routebook.cli._resolve import resolve_service
from routebook.routing.router import Router
from routebook.service import BINDABLE_METHODS


def run_routes(args: argparse.Namespace) -> None:
    try:
        service = resolve_service(args.service)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    router = Router()
    service.dispatch_table(router)
    rows = [
        (b.method, b.path, getattr(b.handler, "__name__", str(b.handler)))
        for b in router.bindings
    ]

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))

    skipped = [r for r in service.routes() if r.method not in BINDABLE_METHODS]
    if skipped:
        print(f"\n{len(skipped)} declared route(s) not bound (unsupported method)")
