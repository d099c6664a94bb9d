"""tarqeem-ir CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List

from .analysis import get_function
from .cfg import cfg_to_dot
from .errors import FunctionNotFoundError
from .model import IRFunction, IRModule
from .output import (
    cfg_payload,
    emit_error,
    emit_result,
    render_blocks,
    render_cfg,
    render_summary,
    summarize_module,
)
from .parser import parse_ir

LOG = logging.getLogger("tarqeem_ir.cli")


def _configure_logging(level: str) -> None:
    # stdout carries command output only
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tarqeem-ir", description="Inspect Tarqeem IR dumps (tarqeem compile --dump-ir)")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("TARQEEM_IR_LOG", "WARNING"),
        help="Logging level (default WARNING, or $TARQEEM_IR_LOG)",
    )

    source = argparse.ArgumentParser(add_help=False)
    source.add_argument("path", help="IR dump file, or '-' for stdin")

    selector = argparse.ArgumentParser(add_help=False)
    selector.add_argument("-f", "--function", help="Only this function (name with or without '@')")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("summary", parents=[source], help="Module overview")
    blocks = sub.add_parser("blocks", parents=[source, selector], help="Basic blocks and instructions")
    blocks.add_argument("--arabic", action="store_true", help="Prefix instructions with Arabic category labels")
    sub.add_parser("cfg", parents=[source, selector], help="Control-flow graph nodes and edges")
    sub.add_parser("dot", parents=[source, selector], help="Control-flow graph as Graphviz DOT")
    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _select_functions(module: IRModule, name: str | None) -> List[IRFunction]:
    if name:
        return [get_function(module, name)]
    return list(module.functions)


def _cmd_summary(args: argparse.Namespace, module: IRModule) -> int:
    emit_result(json_output=args.json, message=render_summary(module), data=summarize_module(module))
    return 0


def _cmd_blocks(args: argparse.Namespace, module: IRModule) -> int:
    functions = _select_functions(module, args.function)
    text = "\n\n".join(render_blocks(fn, arabic=args.arabic) for fn in functions)
    emit_result(json_output=args.json, message=text, data={"functions": [fn.to_dict() for fn in functions]})
    return 0


def _cmd_cfg(args: argparse.Namespace, module: IRModule) -> int:
    functions = _select_functions(module, args.function)
    text = "\n\n".join(render_cfg(fn) for fn in functions)
    emit_result(json_output=args.json, message=text, data={"functions": [cfg_payload(fn) for fn in functions]})
    return 0


def _cmd_dot(args: argparse.Namespace, module: IRModule) -> int:
    functions = _select_functions(module, args.function)
    graphs = [{"function": fn.name, "dot": cfg_to_dot(fn)} for fn in functions]
    text = "\n\n".join(entry["dot"] for entry in graphs)
    emit_result(json_output=args.json, message=text, data={"graphs": graphs})
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, IRModule], int]] = {
    "summary": _cmd_summary,
    "blocks": _cmd_blocks,
    "cfg": _cmd_cfg,
    "dot": _cmd_dot,
}


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        text = _read_source(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        emit_error(json_output=args.json, message=f"cannot read {args.path}: {exc}")
        return 1
    module = parse_ir(text)
    LOG.debug("parsed module %r: %d function(s)", module.name, len(module.functions))
    try:
        return COMMANDS[args.command](args, module)
    except FunctionNotFoundError as exc:
        emit_error(json_output=args.json, message=str(exc), data={"functions": [fn.name for fn in module.functions]})
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
