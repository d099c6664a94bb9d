"""
Pytest configuration and fixtures for tarqeem_ir tests.
"""
import sys
from pathlib import Path

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))


SAMPLE_IR = """\
; Module: shapes
; str#0 = "hello"
; str#3 = "مرحبا"

struct %class.Point {
  x: i32
  y: i32
}

global @counter: i32 = 0
global @name: ptr

fn @main() -> i32 {
bb0:  ; entry
  %0: i32 = global_load @counter
  %1: i1 = lt %0, 10
  br %1, label bb1, label bb2
bb1:  ; loop
  %2: i32 = add %0, 1
  global_store @counter, %2
  jump bb3
bb2:
  call @print(str#0)
  jump bb3
bb3:  ; merge
  %3: i32 = phi [%2, bb1], [%0, bb2]
  ret %3
}

async fn @fetch(%0: ptr, %1: i32) {
bb0:
  %2: ptr = call @http_get(%0)
  store %2, %1
  ret
}
"""


@pytest.fixture
def sample_ir() -> str:
    return SAMPLE_IR


@pytest.fixture
def sample_path(tmp_path: Path) -> Path:
    path = tmp_path / "shapes.ir"
    path.write_text(SAMPLE_IR, encoding="utf-8")
    return path
