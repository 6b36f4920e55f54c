"""Command line front end: runs one file system operation and prints JSON."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Mapping, Sequence

from orlafs import operations
from orlafs.operations import FsToolError

__all__ = ["OPERATIONS", "parse_bool", "build_parser", "run_operation", "main"]

OPERATIONS = ("read", "write", "list", "exists", "stat", "mkdir", "rm", "mv", "cp")

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_FLAGS: dict[str, tuple[str, str]] = {
    "path": ("", "Path to file or directory"),
    "source": ("", "Source path (for mv, cp)"),
    "dest": ("", "Destination path (for mv, cp)"),
    "content": ("", "Content to write"),
    "recursive": ("false", "Recursive operation"),
    "parents": ("false", "Create parent directories"),
    "create-dirs": ("false", "Create parent directories"),
}

_SUBCOMMAND_HELP = {
    "read": "Read file contents",
    "write": "Write file contents",
    "list": "List directory contents",
    "exists": "Check if path exists",
    "stat": "Get file/directory statistics",
    "mkdir": "Create directory",
    "rm": "Remove file or directory",
    "mv": "Move or rename file/directory",
    "cp": "Copy file or directory",
}


class _UsageError(Exception):
    """Raised by the parser instead of printing usage and exiting."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value such as ``true``, ``F`` or ``1``."""
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise ValueError(f'failed to parse bool {value}: parsing "{value}": invalid syntax')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; flags may appear before or after the command."""
    epilog = "commands:\n" + "\n".join(
        f"  {name:<8}{text}" for name, text in _SUBCOMMAND_HELP.items()
    )
    parser = _Parser(
        prog="fs",
        description="A comprehensive file system operations tool for orla",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=OPERATIONS,
        help="operation to run",
    )
    parser.add_argument(
        "--operation",
        default="",
        help="Operation: " + ", ".join(OPERATIONS),
    )
    for name, (default, text) in _FLAGS.items():
        parser.add_argument(f"--{name}", default=default, help=text)
    return parser


def _dispatch() -> dict[str, Callable[[Callable[[str], str]], dict[str, Any]]]:
    return {
        "read": lambda flag: operations.read(flag("path")),
        "write": lambda flag: operations.write(
            flag("path"), flag("content"), parse_bool(flag("create-dirs"))
        ),
        "list": lambda flag: operations.list_dir(
            flag("path"), parse_bool(flag("recursive"))
        ),
        "exists": lambda flag: operations.exists(flag("path")),
        "stat": lambda flag: operations.stat(flag("path")),
        "mkdir": lambda flag: operations.mkdir(
            flag("path"), parse_bool(flag("parents"))
        ),
        "rm": lambda flag: operations.rm(flag("path"), parse_bool(flag("recursive"))),
        "mv": lambda flag: operations.mv(flag("source"), flag("dest")),
        "cp": lambda flag: operations.cp(
            flag("source"), flag("dest"), parse_bool(flag("recursive"))
        ),
    }


def run_operation(operation: str, options: Mapping[str, str]) -> dict[str, Any]:
    """Run a named operation with flag values keyed by flag name.

    Returns the result with a ``success`` field; a failed operation yields
    ``{"error": ..., "success": False}``. An unknown operation or a malformed
    boolean flag raises :class:`ValueError`.
    """
    handler = _dispatch().get(operation)
    if handler is None:
        raise ValueError(f"unknown operation: {operation}")

    def flag(name: str) -> str:
        return options.get(name, _FLAGS[name][0])

    try:
        result = handler(flag)
    except FsToolError as err:
        return {"error": str(err), "success": False}
    return {"success": True, **result}


def _encode(value: Any) -> str:
    text = json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    for char, escape in (
        ("&", "\\u0026"),
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text


def _emit(value: Any) -> None:
    sys.stdout.write(_encode(value) + "\n")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the operation, print its JSON result; return the exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as err:
        _emit({"error": str(err), "success": False})
        return 1

    operation = args.command or args.operation
    if not operation:
        parser.print_help(sys.stdout)
        return 0

    options = {name: getattr(args, name.replace("-", "_")) for name in _FLAGS}
    try:
        result = run_operation(operation, options)
    except ValueError as err:
        _emit({"error": str(err), "success": False})
        return 1

    _emit(result)
    if operation == "exists" or result["success"]:
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())