"""
tarqeem_ir - parser and CFG reconstruction for Tarqeem IR dumps.

Turns the text printed by ``tarqeem compile --dump-ir`` into a module tree
(string pool, classes, globals, functions, basic blocks, instructions) with
successor and predecessor edges, for tree and graph viewers to consume:

    model.py         → dataclasses for the module tree and CFG projections
    instructions.py  → per-line instruction classification, branch targets
    parser.py        → module/function/block parsing, predecessor inference
    cfg.py           → CFG projection and DOT rendering
    analysis.py      → opcode categories, phi detection, defined variables
    cli.py           → ``tarqeem-ir`` command-line viewer
"""

from .model import (  # noqa: F401
    VOID_TYPE,
    CFGEdge,
    CFGGraph,
    CFGNode,
    IRBasicBlock,
    IRClass,
    IRField,
    IRFunction,
    IRGlobal,
    IRInstruction,
    IRModule,
    IRParam,
    IRStringEntry,
)
from .errors import FunctionNotFoundError, TarqeemIRError  # noqa: F401
from .instructions import classify_instruction, extract_successors  # noqa: F401
from .parser import infer_predecessors, parse_ir  # noqa: F401
from .cfg import cfg_to_dot, extract_cfg  # noqa: F401
from .analysis import (  # noqa: F401
    categorize,
    find_fallthrough_blocks,
    format_instruction_arabic,
    get_defined_variables,
    get_function,
    has_phi_nodes,
)

__all__ = [
    "VOID_TYPE",
    "IRModule",
    "IRStringEntry",
    "IRClass",
    "IRField",
    "IRGlobal",
    "IRFunction",
    "IRParam",
    "IRBasicBlock",
    "IRInstruction",
    "CFGNode",
    "CFGEdge",
    "CFGGraph",
    "TarqeemIRError",
    "FunctionNotFoundError",
    "classify_instruction",
    "extract_successors",
    "parse_ir",
    "infer_predecessors",
    "extract_cfg",
    "cfg_to_dot",
    "categorize",
    "format_instruction_arabic",
    "has_phi_nodes",
    "get_defined_variables",
    "get_function",
    "find_fallthrough_blocks",
]

__version__ = "0.1.0"
