"""Headless composition: render a meta prompt, merge a pack, print or copy.

Example:
    orchestrator-compose --pack us_id --var count=10 --format json
"""
from __future__ import annotations
import argparse
import logging
import sys

from meta_prompt_orchestrator.common.config import SEED_PATH, TEMPLATE_PATH
from meta_prompt_orchestrator.common.logging_setup import setup_logging
from meta_prompt_orchestrator.session.clipboard import Writer, copy_to_clipboard
from meta_prompt_orchestrator.session.registry import PackNotFoundError
from meta_prompt_orchestrator.session.state import Session

LOGGER = logging.getLogger("orchestrator.cli")

FORMAT_TARGETS = {"text": "dispatch", "json": "json", "rendered": None}

def _parse_var(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {raw!r}")
    return name.strip(), value

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Compose a meta prompt with a pack")
    ap.add_argument("--template", default=TEMPLATE_PATH, help="Meta prompt template path")
    ap.add_argument("--seed", default=SEED_PATH, help="YAML seed with variables and packs")
    ap.add_argument("--pack", help="Pack id to select (default: first pack)")
    ap.add_argument("--var", action="append", type=_parse_var, default=[], metavar="NAME=VALUE",
                    help="Set a variable; may be repeated")
    ap.add_argument("--format", choices=sorted(FORMAT_TARGETS), default="text")
    ap.add_argument("--copy", action="store_true", help="Also place the output on the clipboard")
    return ap

def run(argv: list[str] | None = None, session: Session | None = None, writer: Writer | None = None) -> int:
    args = build_parser().parse_args(argv)
    if session is None:
        session = Session.from_files(args.template, args.seed)

    if args.pack:
        try:
            session.select_pack(args.pack)
        except PackNotFoundError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
    # explicit --var wins over the pack_name set by selection
    for name, value in args.var:
        session.set_variable(name, value)

    missing = session.unresolved()
    if missing:
        LOGGER.warning("Unresolved placeholders: %s", ", ".join(missing))

    target = FORMAT_TARGETS[args.format]
    out = session.rendered() if target is None else session.copy_text(target)
    if args.copy:
        result = copy_to_clipboard(target or args.format, out, writer)
        if not result.copied:
            LOGGER.warning("Output not copied to clipboard: %s", result.error)
    print(out)
    return 0

def main() -> None:
    setup_logging()
    sys.exit(run())

if __name__ == "__main__":
    main()
