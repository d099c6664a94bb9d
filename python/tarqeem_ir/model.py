"""Data model for parsed Tarqeem IR modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

VOID_TYPE = "void"
UNKNOWN_TYPE = "unknown"


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class IRStringEntry:
    """String pool entry; ``value`` is kept exactly as written between the quotes."""

    id: int
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value}


@dataclass
class IRField:
    name: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}


@dataclass
class IRClass:
    name: str
    fields: List[IRField] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}


@dataclass
class IRGlobal:
    name: str
    type: str
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"name": self.name, "type": self.type, "value": self.value})


@dataclass
class IRParam:
    name: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}


@dataclass
class IRInstruction:
    """One classified instruction line.

    ``raw`` is the source line verbatim (indentation included) so viewers can
    display it exactly.  ``dest``/``dest_type`` are only set for the
    assignment form ``%dest: type = op ...``.
    """

    raw: str
    op: str
    operands: List[str] = field(default_factory=list)
    dest: Optional[str] = None
    dest_type: Optional[str] = None
    is_terminator: bool = False
    is_phi: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "raw": self.raw,
                "dest": self.dest,
                "destType": self.dest_type,
                "op": self.op,
                "operands": list(self.operands),
                "isTerminator": self.is_terminator,
                "isPhi": self.is_phi,
            }
        )


@dataclass
class IRBasicBlock:
    """Basic block labelled ``bb<N>``.

    ``successors`` comes only from this block's own terminator.
    ``predecessors`` is filled in afterwards by predecessor inference.
    """

    id: str
    label: Optional[str] = None
    instructions: List[IRInstruction] = field(default_factory=list)
    predecessors: List[str] = field(default_factory=list)
    successors: List[str] = field(default_factory=list)

    @property
    def display_label(self) -> str:
        return self.label or self.id

    @property
    def terminator(self) -> Optional[IRInstruction]:
        if self.instructions and self.instructions[-1].is_terminator:
            return self.instructions[-1]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "label": self.label,
                "instructions": [inst.to_dict() for inst in self.instructions],
                "predecessors": list(self.predecessors),
                "successors": list(self.successors),
            }
        )


@dataclass
class IRFunction:
    name: str
    params: List[IRParam] = field(default_factory=list)
    return_type: str = VOID_TYPE
    is_async: bool = False
    blocks: List[IRBasicBlock] = field(default_factory=list)

    def block(self, block_id: str) -> Optional[IRBasicBlock]:
        """Return the last block registered under ``block_id``."""
        found = None
        for bb in self.blocks:
            if bb.id == block_id:
                found = bb
        return found

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": [p.to_dict() for p in self.params],
            "returnType": self.return_type,
            "isAsync": self.is_async,
            "blocks": [bb.to_dict() for bb in self.blocks],
        }


@dataclass
class IRModule:
    """Root of a parsed IR dump. Built fresh by every parse call."""

    name: str = ""
    strings: List[IRStringEntry] = field(default_factory=list)
    classes: List[IRClass] = field(default_factory=list)
    globals: List[IRGlobal] = field(default_factory=list)
    functions: List[IRFunction] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "strings": [entry.to_dict() for entry in self.strings],
            "classes": [cls.to_dict() for cls in self.classes],
            "globals": [glob.to_dict() for glob in self.globals],
            "functions": [fn.to_dict() for fn in self.functions],
        }


@dataclass(frozen=True)
class CFGNode:
    id: str
    label: str
    instruction_count: int
    predecessors: Tuple[str, ...] = ()
    successors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "instructionCount": self.instruction_count,
            "predecessors": list(self.predecessors),
            "successors": list(self.successors),
        }


@dataclass(frozen=True)
class CFGEdge:
    source: str
    target: str
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"from": self.source, "to": self.target, "label": self.label})


@dataclass(frozen=True)
class CFGGraph:
    """Read-only CFG projection of one function."""

    nodes: Tuple[CFGNode, ...] = ()
    edges: Tuple[CFGEdge, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


__all__ = [
    "VOID_TYPE",
    "UNKNOWN_TYPE",
    "IRStringEntry",
    "IRField",
    "IRClass",
    "IRGlobal",
    "IRParam",
    "IRInstruction",
    "IRBasicBlock",
    "IRFunction",
    "IRModule",
    "CFGNode",
    "CFGEdge",
    "CFGGraph",
]
