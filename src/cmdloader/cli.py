"""Command-line interface: load documents, show host info, edit files."""

import argparse
import logging
import os
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from .config import apply_overrides, load_config
from .documents import load_document
from .executor import edit_file
from .host import current_os, detect_os, detect_shell
from .loader import LoaderError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cmdloader",
        description="Convert documents to text with configured loader commands.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log commands as they run")
    sub = parser.add_subparsers(dest="command", required=True)

    load = sub.add_parser("load", help="Load FILE and print its text")
    load.add_argument("file", type=Path)
    load.add_argument("--config", type=Path, default=None, help="Loader config YAML")
    load.add_argument(
        "--loader",
        action="append",
        default=[],
        metavar="EXT=TEMPLATE",
        help="Loader template for an extension ($1 input, $2 output file); repeatable",
    )

    sub.add_parser("info", help="Show detected OS and shell")

    edit = sub.add_parser("edit", help="Open FILE in an editor")
    edit.add_argument("file", type=Path)
    edit.add_argument("--editor", default=None)

    return parser.parse_args(argv)


def default_editor() -> str:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if editor:
        return editor
    return "notepad" if current_os() == "windows" else "vi"


def _load(args: argparse.Namespace) -> int:
    config = apply_overrides(load_config(args.config), args.loader)
    sys.stdout.write(load_document(args.file, config))
    return 0


def _info() -> int:
    shell = detect_shell()
    print(f"os: {detect_os()}")
    print(f"shell: {shell.name} ({shell.cmd} {shell.arg})")
    return 0


def split_editor(value: str) -> List[str]:
    """Split an editor setting such as "code -w" into program and arguments."""
    words = shlex.split(value, posix=current_os() != "windows")
    if not words:
        raise ValueError(f"Invalid editor: {value!r}")
    return words


def _edit(args: argparse.Namespace) -> int:
    words = split_editor(args.editor or default_editor())
    edit_file(words[0], args.file, editor_args=words[1:])
    return 0


def describe_error(e: BaseException) -> str:
    """Message of e followed by each chained cause."""
    parts = [str(e)]
    cause = e.__cause__
    while cause is not None:
        parts.append(str(cause) or type(cause).__name__)
        cause = cause.__cause__
    return ": ".join(parts)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "load":
            return _load(args)
        if args.command == "info":
            return _info()
        return _edit(args)
    except (LoaderError, OSError, ValueError) as e:
        print(f"error: {describe_error(e)}", file=sys.stderr)
        return 1
