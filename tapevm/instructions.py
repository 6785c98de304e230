"""Instruction set and compiled program representation.

The machine understands exactly eight instructions, each spelled as a
single character in program source. Any other character is not an
instruction at all; `Instruction.from_char` reports that by returning
``None`` so callers can simply drop it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class Instruction(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    JUMP_FORWARD = '['
    JUMP_BACKWARD = ']'

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_char(cls, c: str) -> Optional['Instruction']:
        """Return the instruction spelled by `c`, or None for any other character."""
        return _BY_SYMBOL.get(c)

    def __repr__(self) -> str:
        return f"<{self.name} {self.value!r}>"


_BY_SYMBOL = {inst.value: inst for inst in Instruction}


@dataclass(frozen=True)
class Program:
    """A compiled program: the recognized instructions in source order."""
    instructions: Tuple[Instruction, ...] = ()

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __str__(self) -> str:
        return ''.join(inst.symbol for inst in self.instructions)
