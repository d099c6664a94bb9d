"""Parser for the textual IR emitted by ``tarqeem compile --dump-ir``.

The dump is machine-generated debug output rather than a stable contract, so
parsing is best effort: every line is either recognised or skipped, partial
matches are dropped, and ``parse_ir`` always returns a module.  Nothing here
raises on malformed input.

Recognised top-level constructs::

    ; Module: <name>
    ; str#<id> = "<value>"
    struct %class.<Name> {
      <field>: <type>
    }
    global @<name>: <type> [= <value>]
    [async] fn @<name>(%0: <type>, ...) [-> <type>] {
    bb0:            ; optional label
      %1: i32 = add %0, 1
      br %c, label bb1, label bb2
    }
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Set

from .instructions import classify_instruction, extract_successors
from .model import (
    UNKNOWN_TYPE,
    VOID_TYPE,
    IRBasicBlock,
    IRClass,
    IRField,
    IRFunction,
    IRGlobal,
    IRModule,
    IRParam,
    IRStringEntry,
)

LOGGER = logging.getLogger("tarqeem_ir.parser")

MODULE_NAME_PREFIX = "; Module:"
STRING_ENTRY_RE = re.compile(r';\s*str#(\d+)\s*=\s*"(.*)"')
STRUCT_RE = re.compile(r"struct %class\.([^\s{]+)")
FIELD_RE = re.compile(r"(\S+):\s*(.+)")
GLOBAL_RE = re.compile(r"global @(\S+):\s*(\S+)(?:\s*=\s*(.+))?")
FUNCTION_RE = re.compile(r"fn @([^\s(]+)\(([^)]*)\)(?:\s*->\s*([^\s{]+))?")
PARAM_RE = re.compile(r"^(%[\w.]+):\s*(.+)$")
BLOCK_RE = re.compile(r"^(bb\d+):(?:\s*;\s*(.+))?")


def parse_ir(text: str) -> IRModule:
    """Parse a complete IR dump into an :class:`IRModule`.

    Predecessor sets are inferred once all functions have been read, since a
    terminator may name a block that appears later in the text.
    """
    module = IRModule()
    lines = split_lines(text)
    total = len(lines)
    idx = 0
    while idx < total:
        line = lines[idx].strip()
        idx += 1
        if not line:
            continue
        if line.startswith(";"):
            _parse_comment(module, line)
            continue
        if line.startswith("struct %class."):
            idx = _parse_struct(module, line, lines, idx)
            continue
        if line.startswith("global @"):
            glob = parse_global(line)
            if glob is not None:
                module.globals.append(glob)
            else:
                LOGGER.debug("line %d: unrecognised global: %s", idx, line)
            continue
        if line.startswith(("fn @", "async fn @")):
            header = FUNCTION_RE.search(line)
            if header is not None:
                idx = _parse_function(module, line, header, lines, idx)
                continue
        LOGGER.debug("line %d: skipped: %s", idx, line)

    infer_predecessors(module.functions)
    return module


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds and Unicode line separators stay inside their line.
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def _parse_comment(module: IRModule, line: str) -> None:
    if line.startswith(MODULE_NAME_PREFIX):
        module.name = line[len(MODULE_NAME_PREFIX):].strip()
        return
    entry = STRING_ENTRY_RE.search(line)
    if entry:
        module.strings.append(IRStringEntry(id=int(entry.group(1)), value=entry.group(2)))


def _parse_struct(module: IRModule, header: str, lines: List[str], idx: int) -> int:
    match = STRUCT_RE.match(header)
    cls = IRClass(name=match.group(1) if match else "Unknown")
    module.classes.append(cls)
    if header.endswith("}"):
        # one-line form: struct %class.P { x: i32, y: ptr }
        body = header[header.find("{") + 1 : -1] if "{" in header else ""
        for part in body.split(","):
            part = part.strip()
            if not part:
                continue
            field_match = FIELD_RE.search(part)
            if field_match:
                cls.fields.append(IRField(name=field_match.group(1), type=field_match.group(2).strip()))
            else:
                LOGGER.debug("struct %%class.%s: unrecognised inline field: %s", cls.name, part)
        return idx
    total = len(lines)
    while idx < total:
        line = lines[idx].strip()
        idx += 1
        if line == "}":
            break
        if not line or line.startswith(";"):
            continue
        field_match = FIELD_RE.search(line)
        if field_match:
            cls.fields.append(IRField(name=field_match.group(1), type=field_match.group(2)))
    return idx


def parse_global(line: str) -> Optional[IRGlobal]:
    match = GLOBAL_RE.search(line)
    if not match:
        return None
    name, type_name, value = match.groups()
    return IRGlobal(name=name, type=type_name, value=value)


def parse_params(text: str) -> List[IRParam]:
    """Split a raw parameter list; parts not shaped ``%n: type`` keep their text as name."""
    if not text.strip():
        return []
    params: List[IRParam] = []
    for part in text.split(","):
        part = part.strip()
        match = PARAM_RE.match(part)
        if match:
            params.append(IRParam(name=match.group(1), type=match.group(2).strip()))
        else:
            params.append(IRParam(name=part, type=UNKNOWN_TYPE))
    return params


def _parse_function(module: IRModule, header_line: str, header: re.Match, lines: List[str], idx: int) -> int:
    name, param_text, return_type = header.groups()
    function = IRFunction(
        name=name,
        params=parse_params(param_text),
        return_type=return_type or VOID_TYPE,
        is_async=header_line.startswith("async"),
    )
    total = len(lines)
    if "{" not in header_line and idx < total and lines[idx].strip() == "{":
        idx += 1

    block: Optional[IRBasicBlock] = None
    while idx < total:
        raw = lines[idx]
        line = raw.strip()
        idx += 1
        if line == "}":
            if block is not None:
                function.blocks.append(block)
            module.functions.append(function)
            return idx
        if not line:
            continue
        if line.startswith(";"):
            _parse_comment(module, line)
            continue
        label_match = BLOCK_RE.match(line)
        if label_match:
            if block is not None:
                function.blocks.append(block)
            block = IRBasicBlock(id=label_match.group(1), label=label_match.group(2))
            continue
        instruction = classify_instruction(raw)
        if instruction is None:
            continue
        if block is None:
            LOGGER.debug("line %d: instruction outside any block in @%s dropped", idx, name)
            continue
        block.instructions.append(instruction)
        if instruction.is_terminator:
            # last terminator in a block wins
            block.successors = extract_successors(instruction.raw)

    LOGGER.warning("function @%s is not closed before end of input", name)
    if block is not None:
        function.blocks.append(block)
    module.functions.append(function)
    return idx


def infer_predecessors(functions: Iterable[IRFunction]) -> None:
    """Fill ``predecessors`` from every block's ``successors``.

    Successor ids that do not name a block of the same function are ignored.
    When a label repeats, the last block registered under it receives the
    predecessors.  Terminator-less blocks get no implicit fall-through edge.
    """
    for function in functions:
        by_id: Dict[str, IRBasicBlock] = {}
        for block in function.blocks:
            by_id[block.id] = block
        recorded: Dict[str, Set[str]] = {}
        for block in function.blocks:
            for succ_id in block.successors:
                target = by_id.get(succ_id)
                if target is None:
                    continue
                seen = recorded.setdefault(target.id, set(target.predecessors))
                if block.id in seen:
                    continue
                seen.add(block.id)
                target.predecessors.append(block.id)


__all__ = [
    "parse_ir",
    "split_lines",
    "parse_global",
    "parse_params",
    "infer_predecessors",
]
