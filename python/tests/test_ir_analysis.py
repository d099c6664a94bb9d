from __future__ import annotations

import pytest

from tarqeem_ir.analysis import (
    categorize,
    find_fallthrough_blocks,
    format_instruction_arabic,
    get_defined_variables,
    get_function,
    has_phi_nodes,
)
from tarqeem_ir.errors import FunctionNotFoundError, TarqeemIRError
from tarqeem_ir.instructions import classify_instruction
from tarqeem_ir.parser import parse_ir


@pytest.mark.parametrize(
    "op, category",
    [
        ("phi", "phi"),
        ("add", "arithmetic"),
        ("xor", "arithmetic"),
        ("not", "arithmetic"),
        ("alloca", "memory"),
        ("get_field", "memory"),
        ("global_store", "memory"),
        ("jump", "control"),
        ("switch", "control"),
        ("throw", "control"),
        ("call", "call"),
        ("call_virtual", "call"),
        ("lt", "other"),
        ("", "other"),
    ],
)
def test_categorize(op: str, category: str) -> None:
    assert categorize(op) == category


def test_has_phi_nodes(sample_ir: str) -> None:
    main, fetch = parse_ir(sample_ir).functions
    assert has_phi_nodes(main)
    assert not has_phi_nodes(fetch)


def test_get_defined_variables_first_occurrence_order() -> None:
    module = parse_ir(
        "fn @f() {\n"
        "bb0:\n  %2: i32 = add 1, 2\n  %1: i32 = mul %2, 2\n  jump bb1\n"
        "bb1:\n  %2: i32 = phi [%2, bb0]\n  store %1, %2\n  ret\n"
        "}\n"
    )
    assert get_defined_variables(module.functions[0]) == ["%2", "%1"]


def test_get_defined_variables_sample(sample_ir: str) -> None:
    main, fetch = parse_ir(sample_ir).functions
    assert get_defined_variables(main) == ["%0", "%1", "%2", "%3"]
    assert get_defined_variables(fetch) == ["%2"]


def test_format_instruction_arabic() -> None:
    assert format_instruction_arabic(classify_instruction("%3: i32 = phi [%1, bb0]")) == "[دمج] %3: i32 = phi [%1, bb0]"
    assert format_instruction_arabic(classify_instruction("ret")) == "[تحكم] ret"
    assert format_instruction_arabic(classify_instruction("nop")) == "[أخرى] nop"


def test_get_function(sample_ir: str) -> None:
    module = parse_ir(sample_ir)
    assert get_function(module, "fetch").is_async
    assert get_function(module, "@main").name == "main"
    with pytest.raises(FunctionNotFoundError) as excinfo:
        get_function(module, "@missing")
    assert excinfo.value.name == "missing"
    assert isinstance(excinfo.value, LookupError)
    assert isinstance(excinfo.value, TarqeemIRError)


def test_find_fallthrough_blocks() -> None:
    module = parse_ir(
        "fn @ft() {\n"
        "bb0:\n  %0: i32 = add 1, 2\n"
        "bb1:\n"
        "bb2:\n  jump bb3\n"
        "bb3:\n  %1: i32 = add %0, 1\n"
        "}\n"
    )
    assert find_fallthrough_blocks(module.functions[0]) == ["bb0", "bb1"]


def test_sample_has_no_fallthrough(sample_ir: str) -> None:
    for fn in parse_ir(sample_ir).functions:
        assert find_fallthrough_blocks(fn) == []
