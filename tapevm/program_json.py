"""JSON serialization/deserialization for compiled programs.

A program is stored as an object holding the instruction names in order,
for example ``{"__type__": "Program", "instructions": ["INCREMENT", "OUTPUT"]}``.
"""

from __future__ import annotations

from typing import Any, Dict

from .instructions import Instruction, Program


def program_to_obj(program: Program) -> Dict[str, Any]:
    return {
        "__type__": "Program",
        "instructions": [inst.name for inst in program],
    }


def program_from_obj(obj: Dict[str, Any]) -> Program:
    if not isinstance(obj, dict) or obj.get("__type__") != "Program":
        raise ValueError("Expected a serialized Program object")
    names = obj.get("instructions", [])
    if not isinstance(names, list):
        raise ValueError("Program instructions must be a list")
    instructions = []
    for name in names:
        if not isinstance(name, str):
            raise ValueError(f"Instruction name must be a string: {name!r}")
        try:
            instructions.append(Instruction[name])
        except KeyError:
            raise ValueError(f"Unknown instruction: {name!r}")
    return Program(tuple(instructions))
