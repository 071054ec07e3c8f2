from __future__ import annotations

import argparse
import json
import sys
import textwrap
from bisect import bisect_right
from importlib.metadata import PackageNotFoundError, version as dist_version
from pathlib import Path
from typing import Any

from .errors import IdentifierValidationError
from .fqn import Fqn
from .logging import configure_cli_logger, get_logger
from .scan import FqnToken, iter_fqn_tokens

_LOG_MODE_CHOICES = ("warning", "info", "debug")


def _resolve_version() -> str:
    try:
        return dist_version("fqnkit")
    except PackageNotFoundError:
        return "dev"


class _FqnkitHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Hide argparse subparser metavar line and keep only concrete commands."""

    def _format_action(self, action: argparse.Action) -> str:
        if isinstance(action, argparse._SubParsersAction):
            parts: list[str] = []
            self._indent()
            for subaction in self._iter_indented_subactions(action):
                parts.append(self._format_action(subaction))
            self._dedent()
            return "".join(parts)
        return super()._format_action(action)


def _root_card() -> str:
    return textwrap.dedent(
        """
        fqnkit CLI

        Start here:
          fqnkit check package.module.Type
          fqnkit scan ./source.txt
          cat notes.md | fqnkit scan --unique

        Use 'fqnkit --help' for full options, 'fqnkit help examples' for copy-paste examples.
        """
    ).strip()


def _examples_card() -> str:
    return textwrap.dedent(
        """
        Quick examples:
          fqnkit check a.b.c.Name
          fqnkit check alpha beta.gamma --json
          fqnkit check a..b
          fqnkit scan ./module.src
          fqnkit scan ./module.src --json
          fqnkit scan - --unique < ./module.src
        """
    ).strip()


def _describe(fqn: Fqn) -> dict[str, Any]:
    return {
        "name": fqn.as_string(),
        "parts": [part.as_str() for part in fqn.parts],
        "leaf": fqn.leaf().as_str(),
        "simple": fqn.is_simple(),
    }


def _line_starts(text: str) -> list[int]:
    starts = [0]
    for index, char in enumerate(text):
        if char == "\n":
            starts.append(index + 1)
    return starts


def _locate(token: FqnToken, line_starts: list[int]) -> tuple[int, int]:
    line = bisect_right(line_starts, token.start) - 1
    return line + 1, token.start - line_starts[line] + 1


def _read_source(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _print_json(value: Any) -> None:
    print(json.dumps(value, ensure_ascii=False, indent=2))


def _cmd_check(args: argparse.Namespace) -> int:
    local_logger = get_logger(action="check")
    results: list[dict[str, Any]] = []
    failed = False
    for raw in args.names:
        try:
            fqn = Fqn.new(raw)
        except IdentifierValidationError as exc:
            local_logger.info("rejected {!r}: {}", raw, exc)
            results.append({"name": raw, "valid": False, "error": str(exc)})
            failed = True
            continue
        results.append({"valid": True, **_describe(fqn)})

    if args.json:
        _print_json(results)
        return 1 if failed else 0

    for item in results:
        if not item["valid"]:
            print(f"{item['name']}\tinvalid\t{item['error']}")
            continue
        kind = "simple" if item["simple"] else f"{len(item['parts'])} parts"
        print(f"{item['name']}\tok\t{kind}\tleaf={item['leaf']}")
    return 1 if failed else 0


def _cmd_scan(args: argparse.Namespace) -> int:
    text = _read_source(args.path)
    line_starts = _line_starts(text)
    seen: set[str] = set()
    entries: list[dict[str, Any]] = []
    for token in iter_fqn_tokens(text):
        if args.unique:
            if token.text in seen:
                continue
            seen.add(token.text)
        line, column = _locate(token, line_starts)
        entries.append({"name": token.text, "line": line, "column": column})

    get_logger(action="scan").info(
        "scanned {} character(s), {} token(s)", len(text), len(entries)
    )

    if args.json:
        _print_json(entries)
        return 0

    for entry in entries:
        print(f"{entry['line']}:{entry['column']}\t{entry['name']}")
    return 0


def _cmd_help(args: argparse.Namespace) -> int:
    print(_examples_card())
    return 0


def _add_log_mode_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-mode",
        choices=_LOG_MODE_CHOICES,
        default=None,
        help="Logging verbosity (default: FQNKIT_LOG_MODE or warning).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fqnkit",
        description=textwrap.dedent(
            """
            fqnkit CLI
            Validate fully-qualified names and find them in text.
            """
        ).strip(),
        epilog="Use 'fqnkit help examples' for copy-paste examples.",
        formatter_class=_FqnkitHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {_resolve_version()}",
        help="Show fqnkit version and exit.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging (equivalent to --log-mode debug).",
    )
    subparsers = parser.add_subparsers(
        dest="command",
        required=False,
        title="commands",
    )

    parser_check = subparsers.add_parser("check", help="Validate dotted names")
    parser_check.add_argument("names", nargs="+", help="Dotted names, e.g. a.b.Type")
    parser_check.add_argument("--json", action="store_true", help="Output JSON")
    _add_log_mode_arg(parser_check)
    parser_check.set_defaults(func=_cmd_check)

    parser_scan = subparsers.add_parser("scan", help="List FQN tokens found in text")
    parser_scan.add_argument(
        "path",
        nargs="?",
        default=None,
        help="File to scan. Reads stdin when omitted or '-'.",
    )
    parser_scan.add_argument(
        "--unique",
        action="store_true",
        help="Report each distinct name once, at its first occurrence.",
    )
    parser_scan.add_argument("--json", action="store_true", help="Output JSON")
    _add_log_mode_arg(parser_scan)
    parser_scan.set_defaults(func=_cmd_scan)

    parser_help = subparsers.add_parser("help", help="Show quick examples")
    parser_help.add_argument(
        "topic",
        nargs="?",
        default="examples",
        choices=("examples",),
        help="Help topic",
    )
    parser_help.set_defaults(func=_cmd_help)

    return parser


def main(argv: list[str] | None = None) -> int:
    raw_argv = list(sys.argv[1:] if argv is None else argv)
    force_debug = False
    parse_argv: list[str] = []
    for token in raw_argv:
        if token in ("-d", "--debug"):
            force_debug = True
            continue
        parse_argv.append(token)

    parser = build_parser()
    args = parser.parse_args(parse_argv)

    if args.command is None:
        print(_root_card())
        return 0

    selected_mode = "debug" if force_debug else getattr(args, "log_mode", None)
    configure_cli_logger(selected_mode)

    try:
        return args.func(args)
    except Exception as exc:
        print(f"fqnkit error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
