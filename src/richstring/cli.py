"""Command-line interface for richstring.

Usage::

    richstring note.xml -s styles.css              # JSON runs on stdout
    richstring note.xml -s base.css -s extra.css   # stylesheets concatenated
    richstring note.xml -s styles.css -f html -o note.html
    echo '<b>hi</b>' | richstring - -s styles.css
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from richstring import __version__
from richstring.converter import DEFAULT_FONT_NAME, DEFAULT_FONT_SIZE, RichString
from richstring.errors import MarkupError
from richstring.renderer import runs_to_dicts, runs_to_html

FORMATS = ["json", "html"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="richstring",
        description="Convert tag markup into styled text runs using a stylesheet.",
    )
    parser.add_argument(
        "input",
        help="Path to the markup file, or '-' to read standard input.",
    )
    parser.add_argument(
        "-s", "--stylesheet",
        action="append",
        default=[],
        help="Stylesheet file; may be repeated, files are concatenated in order.",
    )
    parser.add_argument(
        "-f", "--format",
        default="json",
        choices=FORMATS,
        help="Output format (default: %(default)s).",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to standard output.",
    )
    parser.add_argument(
        "--font-name",
        default=DEFAULT_FONT_NAME,
        help="Root font name (default: %(default)s).",
    )
    parser.add_argument(
        "--font-size",
        type=float,
        default=DEFAULT_FONT_SIZE,
        help="Root font size (default: %(default)s).",
    )
    parser.add_argument(
        "--root-rule",
        help="Stylesheet rule applied to top-level text.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped stylesheet clauses and parse failures.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    paths = [Path(name) for name in args.stylesheet]
    if args.input != "-":
        paths.append(Path(args.input))
    for path in paths:
        if not path.is_file():
            print(f"Error: file not found: {path}", file=sys.stderr)
            return 1

    try:
        sources = [
            Path(name).read_text(encoding=args.encoding) for name in args.stylesheet
        ]
        if args.input == "-":
            markup = sys.stdin.read()
        else:
            markup = Path(args.input).read_text(encoding=args.encoding)

        rich = RichString(
            *sources,
            default_font_name=args.font_name,
            default_font_size=args.font_size,
            root_rule=args.root_rule,
        )
        runs = rich.render(markup)
    except (OSError, LookupError, UnicodeDecodeError, MarkupError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.format == "html":
        text = runs_to_html(runs) + "\n"
    else:
        text = json.dumps(runs_to_dicts(runs), ensure_ascii=False, indent=2) + "\n"

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
