"""Tests for per-line instruction classification and branch target extraction."""

from __future__ import annotations

import pytest

from tarqeem_ir.instructions import classify_instruction, extract_successors


def test_assignment_captures_dest_type_and_operands() -> None:
    inst = classify_instruction("%1: i32 = add %0, 1")
    assert inst is not None
    assert inst.dest == "%1"
    assert inst.dest_type == "i32"
    assert inst.op == "add"
    assert inst.operands == ["%0,", "1"]
    assert not inst.is_terminator
    assert not inst.is_phi


def test_phi_assignment_sets_flag() -> None:
    inst = classify_instruction("%5: i32 = phi [%1, bb0], [%2, bb1]")
    assert inst.is_phi
    assert inst.op == "phi"
    assert inst.operands == ["[%1,", "bb0],", "[%2,", "bb1]"]


@pytest.mark.parametrize(
    "line, op",
    [
        ("ret", "ret"),
        ("ret %3", "ret"),
        ("jump bb4", "jump"),
        ("br %c, label bb1, label bb2", "br"),
        ("throw %err", "throw"),
    ],
)
def test_terminators(line: str, op: str) -> None:
    inst = classify_instruction(line)
    assert inst.is_terminator
    assert inst.op == op
    assert inst.dest is None


def test_call_and_store_without_assignment() -> None:
    call = classify_instruction("call @print(str#0)")
    assert call.op == "call"
    assert call.operands == ["@print(str#0)"]
    assert not call.is_terminator
    store = classify_instruction("store %2, %1")
    assert store.op == "store"
    assert store.operands == ["%2,", "%1"]


def test_unknown_opcode_falls_back_to_first_token() -> None:
    inst = classify_instruction("frobnicate %a %b")
    assert inst.op == "frobnicate"
    assert inst.operands == ["%a", "%b"]
    # "br" without a trailing space is not a branch
    brk = classify_instruction("brk 3")
    assert brk.op == "brk"
    assert not brk.is_terminator


def test_raw_keeps_surrounding_whitespace() -> None:
    line = "    jump bb4  "
    inst = classify_instruction(line)
    assert inst.raw == line
    assert inst.op == "jump"
    assert inst.operands == ["bb4"]


@pytest.mark.parametrize("line", ["", "   ", "; comment", "  ; str#1 = \"x\""])
def test_blank_and_comment_lines_are_not_instructions(line: str) -> None:
    assert classify_instruction(line) is None


def test_extract_successors_shapes() -> None:
    assert extract_successors("jump bb7") == ["bb7"]
    assert extract_successors("br %c, label bb2, label bb1") == ["bb2", "bb1"]
    assert extract_successors("br i1 %0, bb1, bb2") == ["bb1", "bb2"]
    assert extract_successors("  br %cond,label bb3,  label bb4") == ["bb3", "bb4"]


def test_extract_successors_for_sinks_and_unknown_shapes() -> None:
    assert extract_successors("ret") == []
    assert extract_successors("ret %0") == []
    assert extract_successors("throw %e") == []
    assert extract_successors("br %c") == []
