"""gh-shorthand CLI.

Subcommands:
  resolve  -> expand one input string and print Alfred items JSON
  serve    -> run the unix-socket JSON-RPC server
  check    -> validate the configuration and list the shorthand tables
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Callable
from typing import Any

from ghshorthand.alfred import build_items
from ghshorthand.config import ShorthandConfig
from ghshorthand.errors import ShorthandError
from ghshorthand.logging import get_logger
from ghshorthand.parser import resolve
from ghshorthand.runtime import execute_command, prepare_config
from ghshorthand.server import run_server

CONFIG_HELP = "Configuration file (default: ~/.gh-shorthand.yml, env: GH_SHORTHAND_CONFIG)"

_MAX_HELP_WIDTH = 100


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


class _FormatterArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", _HelpFormatter)
        super().__init__(*args, **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    p = _FormatterArgumentParser(
        prog="gh-shorthand", description="Expand GitHub shorthand into repos, issues and paths"
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output (env: GH_SHORTHAND_QUIET=1)",
    )
    sub = p.add_subparsers(
        dest="cmd",
        required=True,
        parser_class=_FormatterArgumentParser,
        metavar="<command>",
    )

    pr = sub.add_parser("resolve", help="Resolve input and print launcher items as JSON")
    pr.add_argument("input", nargs="?", default="", help="Shorthand input, e.g. 'zw 42'")
    pr.add_argument("--config", help=CONFIG_HELP)
    pr.add_argument(
        "--json-resolution",
        action="store_true",
        help="Print the parsed resolution instead of launcher items",
    )

    ps = sub.add_parser("serve", help="Run the JSON-RPC server on a unix socket")
    ps.add_argument("--config", help=CONFIG_HELP)
    ps.add_argument("--socket", help="Override socket_path from the configuration")

    pc = sub.add_parser("check", help="Validate configuration and list shorthands")
    pc.add_argument("--config", help=CONFIG_HELP)

    return p


def _cmd_resolve(cfg: ShorthandConfig, args: argparse.Namespace) -> int:
    resolution = resolve(cfg.repos, cfg.users, args.input)
    get_logger().log_resolution(args.input, resolution.kind.value, resolution.annotation())
    if args.json_resolution:
        payload = {**resolution.to_dict(), "annotation": resolution.annotation()}
    else:
        payload = build_items(resolution, cfg).to_dict()
    sys.stdout.write(json.dumps(payload) + "\n")
    return 0


def _cmd_serve(cfg: ShorthandConfig, args: argparse.Namespace) -> int:
    return run_server(cfg)


def _cmd_check(cfg: ShorthandConfig, args: argparse.Namespace) -> int:
    from .ux import print_error, print_success, print_table, print_warning  # noqa: PLC0415

    malformed = cfg.malformed_repos()
    if not args.quiet:
        source = str(cfg.source_file) if cfg.source_file else "(no configuration file)"
        print_table(
            "Configuration",
            [
                ("file", source),
                ("default_repo", cfg.default_repo or "-"),
                ("socket_path", cfg.socket_path or "-"),
            ],
        )
        print_table("Repo shorthands", sorted(cfg.repos.items()))
        print_table("User shorthands", sorted(cfg.users.items()))
    if not cfg.socket_path:
        print_warning("no socket_path configured; 'serve' will not start")
    if malformed:
        print_error(f"{len(malformed)} repo shorthand(s) do not expand to owner/name:")
        for key, value in sorted(malformed.items()):
            print(f"  - {key}: {value!r}", file=sys.stderr)
        return 1
    if not args.quiet:
        print_success(f"{len(cfg.repos)} repo and {len(cfg.users)} user shorthands OK")
    return 0


def _build_handlers(
    args: argparse.Namespace, cfg: ShorthandConfig
) -> dict[str, Callable[[], int]]:
    return {
        "resolve": lambda: _cmd_resolve(cfg, args),
        "serve": lambda: _cmd_serve(cfg, args),
        "check": lambda: _cmd_check(cfg, args),
    }


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "quiet", False) and os.environ.get("GH_SHORTHAND_QUIET") == "1":
        args.quiet = True
    try:
        cfg = prepare_config(args)
    except ShorthandError as exc:
        from .ux import print_error  # noqa: PLC0415

        print_error(str(exc))
        return 1
    handlers = _build_handlers(args, cfg)
    handler = handlers.get(args.cmd)
    if handler is None:  # pragma: no cover - argparse enforces valid choices
        parser.print_help()
        return 1
    return execute_command(handler, args, args.cmd)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
