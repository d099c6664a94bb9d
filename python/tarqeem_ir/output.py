"""Output helpers for the tarqeem-ir CLI."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from tabulate import tabulate

from .analysis import find_fallthrough_blocks, format_instruction_arabic, has_phi_nodes
from .cfg import extract_cfg
from .model import IRFunction, IRModule


def _write_json(payload: Mapping[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def emit_result(*, json_output: bool, message: str, data: Any) -> None:
    """Print ``message``, or ``{"status": "ok", "result": data}`` in JSON mode."""
    if json_output:
        _write_json({"status": "ok", "result": data})
    else:
        print(message)


def emit_error(*, json_output: bool, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Report a failed command.

    The JSON envelope goes to stdout; plain mode writes ``error: ...`` and any details to stderr.
    """
    if json_output:
        payload: Dict[str, Any] = {"status": "error", "error": message}
        if data:
            payload["details"] = dict(data)
        _write_json(payload)
        return
    print(f"error: {message}", file=sys.stderr)
    for key, value in (data or {}).items():
        shown = ", ".join(map(str, value)) if isinstance(value, (list, tuple)) else value
        print(f"  {key}: {shown}", file=sys.stderr)


def render_table(rows: Iterable[Sequence[Any]], headers: Sequence[str]) -> str:
    return tabulate(list(rows), headers=list(headers), tablefmt="github")


def _join_ids(ids: Sequence[str]) -> str:
    return ", ".join(ids) if ids else "-"


def function_signature(function: IRFunction) -> str:
    params = ", ".join(f"{p.name}: {p.type}" for p in function.params)
    prefix = "async fn" if function.is_async else "fn"
    return f"{prefix} @{function.name}({params}) -> {function.return_type}"


def summarize_function(function: IRFunction) -> Dict[str, Any]:
    return {
        "name": function.name,
        "params": len(function.params),
        "returnType": function.return_type,
        "isAsync": function.is_async,
        "blocks": len(function.blocks),
        "hasPhi": has_phi_nodes(function),
    }


def summarize_module(module: IRModule) -> Dict[str, Any]:
    return {
        "name": module.name,
        "strings": [entry.to_dict() for entry in module.strings],
        "classes": [cls.to_dict() for cls in module.classes],
        "globals": [glob.to_dict() for glob in module.globals],
        "functions": [summarize_function(fn) for fn in module.functions],
    }


def render_summary(module: IRModule) -> str:
    out: List[str] = [
        f"module: {module.name or '(unnamed)'}",
        f"  strings: {len(module.strings)}  classes: {len(module.classes)}"
        f"  globals: {len(module.globals)}  functions: {len(module.functions)}",
    ]
    if module.strings:
        out += ["", "strings:", render_table(((e.id, e.value) for e in module.strings), ["id", "value"])]
    if module.globals:
        rows = ((f"@{g.name}", g.type, g.value if g.value is not None else "") for g in module.globals)
        out += ["", "globals:", render_table(rows, ["name", "type", "value"])]
    if module.classes:
        out += ["", "classes:"]
        for cls in module.classes:
            fields = ", ".join(f"{f.name}: {f.type}" for f in cls.fields)
            out.append(f"  %class.{cls.name} {{ {fields} }}" if fields else f"  %class.{cls.name} {{}}")
    if module.functions:
        rows = (
            (f"@{s['name']}", s["params"], s["returnType"], "yes" if s["isAsync"] else "", s["blocks"], "yes" if s["hasPhi"] else "")
            for s in (summarize_function(fn) for fn in module.functions)
        )
        out += ["", "functions:", render_table(rows, ["name", "params", "returns", "async", "blocks", "phi"])]
    return "\n".join(out)


def render_blocks(function: IRFunction, *, arabic: bool = False) -> str:
    out: List[str] = [function_signature(function)]
    rows = (
        (bb.id, bb.label or "", len(bb.instructions), _join_ids(bb.predecessors), _join_ids(bb.successors))
        for bb in function.blocks
    )
    out.append(render_table(rows, ["block", "label", "instrs", "preds", "succs"]))
    for bb in function.blocks:
        out.append("")
        out.append(f"{bb.id}:  ; {bb.label}" if bb.label else f"{bb.id}:")
        for inst in bb.instructions:
            out.append("  " + (format_instruction_arabic(inst) if arabic else inst.raw.strip()))
    return "\n".join(out)


def cfg_payload(function: IRFunction) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"function": function.name}
    payload.update(extract_cfg(function).to_dict())
    payload["fallthrough"] = find_fallthrough_blocks(function)
    return payload


def render_cfg(function: IRFunction) -> str:
    graph = extract_cfg(function)
    out: List[str] = [f"cfg @{function.name}:"]
    rows = (
        (node.id, node.label, node.instruction_count, _join_ids(node.predecessors), _join_ids(node.successors))
        for node in graph.nodes
    )
    out.append(render_table(rows, ["node", "label", "instrs", "preds", "succs"]))
    if graph.edges:
        out.append("edges:")
        out.extend(f"  {edge.source} -> {edge.target}" for edge in graph.edges)
    fallthrough = find_fallthrough_blocks(function)
    if fallthrough:
        out.append(f"note: no terminator (fall-through not modelled): {', '.join(fallthrough)}")
    return "\n".join(out)


__all__ = [
    "emit_result",
    "emit_error",
    "render_table",
    "function_signature",
    "summarize_function",
    "summarize_module",
    "render_summary",
    "render_blocks",
    "cfg_payload",
    "render_cfg",
]
