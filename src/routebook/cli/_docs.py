"""``routebook docs``: write Markdown or JSON documentation."""

import argparse
import sys
from pathlib import Path

from routebook.cli._resolve import resolve_service
from routebook.docs import render_json, render_markdown


def run_docs(args: argparse.Namespace) -> None:
    try:
        service = resolve_service(args.service)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    text = render_json(service) if args.format == "json" else render_markdown(service)

    if args.output is None:
        sys.stdout.write(text)
        return
    Path(args.output).write_text(text, encoding="utf-8")
    print(f"Wrote {args.output}")
