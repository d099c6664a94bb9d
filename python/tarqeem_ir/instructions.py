"""Per-line instruction classification and terminator target extraction."""

from __future__ import annotations

import re
from typing import List, Optional

from .model import IRInstruction

TERMINATOR_PREFIXES = ("ret", "jump", "br ", "throw")

ASSIGN_RE = re.compile(r"^(%[\w.]+):\s*(\S+)\s*=\s*(.+)$")
JUMP_RE = re.compile(r"jump\s+(bb\d+)")
BRANCH_LABEL_RE = re.compile(r"br\s+\S+,\s*label\s+(bb\d+),\s*label\s+(bb\d+)")
# terse form: br i1 %0, bb1, bb2
BRANCH_TERSE_RE = re.compile(r"br\s+\S+\s+\S+,\s*(bb\d+),\s*(bb\d+)")


def classify_instruction(line: str) -> Optional[IRInstruction]:
    """Classify one IR line.

    Returns ``None`` for blank and comment lines; every other line yields an
    instruction, falling back to "first token is the opcode" for mnemonics
    that are not known here.
    """
    text = line.strip()
    if not text or text.startswith(";"):
        return None

    assign = ASSIGN_RE.match(text)
    if assign:
        dest, dest_type, rest = assign.groups()
        parts = rest.split()
        op = parts[0]
        return IRInstruction(
            raw=line,
            op=op,
            operands=parts[1:],
            dest=dest,
            dest_type=dest_type,
            is_phi=op == "phi",
        )

    parts = text.split()
    if text.startswith(TERMINATOR_PREFIXES):
        return IRInstruction(raw=line, op=parts[0], operands=parts[1:], is_terminator=True)
    if text.startswith("call "):
        return IRInstruction(raw=line, op="call", operands=parts[1:])
    if text.startswith("store "):
        return IRInstruction(raw=line, op="store", operands=parts[1:])
    return IRInstruction(raw=line, op=parts[0], operands=parts[1:])


def extract_successors(line: str) -> List[str]:
    """Return the target block ids of a terminator line, in source order.

    ``ret``/``throw`` and any unrecognised shape have no targets.
    """
    match = JUMP_RE.search(line)
    if match:
        return [match.group(1)]
    match = BRANCH_LABEL_RE.search(line)
    if match:
        return [match.group(1), match.group(2)]
    match = BRANCH_TERSE_RE.search(line)
    if match:
        return [match.group(1), match.group(2)]
    return []


__all__ = [
    "TERMINATOR_PREFIXES",
    "classify_instruction",
    "extract_successors",
]
