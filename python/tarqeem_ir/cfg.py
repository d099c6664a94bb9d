"""Control-flow graph projection of a parsed function."""

from __future__ import annotations

from typing import List

from .model import CFGEdge, CFGGraph, CFGNode, IRFunction


def extract_cfg(function: IRFunction) -> CFGGraph:
    """Project ``function`` into nodes (one per block) and edges (one per successor).

    Recomputed on every call; nothing is cached on the function.
    """
    nodes = tuple(
        CFGNode(
            id=block.id,
            label=block.display_label,
            instruction_count=len(block.instructions),
            predecessors=tuple(block.predecessors),
            successors=tuple(block.successors),
        )
        for block in function.blocks
    )
    edges = tuple(
        CFGEdge(source=block.id, target=succ_id)
        for block in function.blocks
        for succ_id in block.successors
    )
    return CFGGraph(nodes=nodes, edges=edges)


def _dot_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def cfg_to_dot(function: IRFunction) -> str:
    """Render the CFG of ``function`` as Graphviz DOT text."""
    graph = extract_cfg(function)
    lines: List[str] = [f"digraph {_dot_quote(function.name)} {{", "  node [shape=rectangle];"]
    for node in graph.nodes:
        text = node.label if node.label == node.id else f"{node.id}: {node.label}"
        lines.append(f"  {_dot_quote(node.id)} [label={_dot_quote(f'{text} ({node.instruction_count})')}];")
    for edge in graph.edges:
        lines.append(f"  {_dot_quote(edge.source)} -> {_dot_quote(edge.target)};")
    lines.append("}")
    return "\n".join(lines)


__all__ = ["extract_cfg", "cfg_to_dot"]
