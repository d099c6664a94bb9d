"""Stateless queries over parsed IR functions."""

from __future__ import annotations

from typing import Dict, FrozenSet, List

from .errors import FunctionNotFoundError
from .model import IRFunction, IRInstruction, IRModule

CATEGORY_ARITHMETIC = "arithmetic"
CATEGORY_MEMORY = "memory"
CATEGORY_CONTROL = "control"
CATEGORY_CALL = "call"
CATEGORY_PHI = "phi"
CATEGORY_OTHER = "other"

ARITHMETIC_OPS: FrozenSet[str] = frozenset(
    {"add", "sub", "mul", "div", "mod", "pow", "neg", "not", "and", "or", "xor"}
)
MEMORY_OPS: FrozenSet[str] = frozenset(
    {"alloca", "load", "store", "gep", "global_load", "global_store", "get_field", "set_field"}
)
CONTROL_OPS: FrozenSet[str] = frozenset({"jump", "br", "ret", "throw", "switch"})
CALL_OPS: FrozenSet[str] = frozenset({"call", "call_indirect", "call_method", "call_virtual"})

_CATEGORY_TABLES = (
    (CATEGORY_ARITHMETIC, ARITHMETIC_OPS),
    (CATEGORY_MEMORY, MEMORY_OPS),
    (CATEGORY_CONTROL, CONTROL_OPS),
    (CATEGORY_CALL, CALL_OPS),
)

ARABIC_CATEGORY_LABELS: Dict[str, str] = {
    CATEGORY_ARITHMETIC: "حسابية",
    CATEGORY_MEMORY: "ذاكرة",
    CATEGORY_CONTROL: "تحكم",
    CATEGORY_CALL: "استدعاء",
    CATEGORY_PHI: "دمج",
    CATEGORY_OTHER: "أخرى",
}


def categorize(op: str) -> str:
    """Map an opcode to its display category (``phi`` checked first)."""
    if op == "phi":
        return CATEGORY_PHI
    for category, table in _CATEGORY_TABLES:
        if op in table:
            return category
    return CATEGORY_OTHER


def format_instruction_arabic(instruction: IRInstruction) -> str:
    label = ARABIC_CATEGORY_LABELS[categorize(instruction.op)]
    return f"[{label}] {instruction.raw}"


def has_phi_nodes(function: IRFunction) -> bool:
    """True when any instruction of ``function`` is a phi (i.e. it is in SSA form)."""
    return any(inst.is_phi for block in function.blocks for inst in block.instructions)


def get_defined_variables(function: IRFunction) -> List[str]:
    """All assignment destinations in block order, without duplicates."""
    names: Dict[str, None] = {}
    for block in function.blocks:
        for inst in block.instructions:
            if inst.dest:
                names.setdefault(inst.dest, None)
    return list(names)


def get_function(module: IRModule, name: str) -> IRFunction:
    """Look up a function by name; a leading ``@`` is accepted."""
    wanted = name[1:] if name.startswith("@") else name
    for function in module.functions:
        if function.name == wanted:
            return function
    raise FunctionNotFoundError(wanted)


def find_fallthrough_blocks(function: IRFunction) -> List[str]:
    """Ids of non-final blocks that do not end in a terminator.

    Control presumably continues into the next block, but no edge is
    synthesised for them; they are reported so viewers can flag them.
    """
    found: List[str] = []
    for block in function.blocks[:-1]:
        if block.terminator is None:
            found.append(block.id)
    return found


__all__ = [
    "CATEGORY_ARITHMETIC",
    "CATEGORY_MEMORY",
    "CATEGORY_CONTROL",
    "CATEGORY_CALL",
    "CATEGORY_PHI",
    "CATEGORY_OTHER",
    "ARABIC_CATEGORY_LABELS",
    "categorize",
    "format_instruction_arabic",
    "has_phi_nodes",
    "get_defined_variables",
    "get_function",
    "find_fallthrough_blocks",
]
