from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Fault:
    """A terminal execution fault.

    `name` identifies the kind of fault ('UnmatchedBracket',
    'InputDecodeFailure' or 'TapeBounds'), `position` is the instruction
    index at which it originated.
    """
    name: str
    message: str
    position: Optional[int] = None

    def __repr__(self) -> str:
        return f"Fault(name={self.name!r}, message={self.message!r}, position={self.position!r})"


class VMError(Exception):
    """Exception type used to propagate execution faults out of the engine."""
    def __init__(self, fault: Fault):
        super().__init__(f"{fault.name}: {fault.message}")
        self.fault = fault


def unmatched_bracket(symbol: str, position: int) -> VMError:
    return VMError(Fault('UnmatchedBracket', f"Unmatched `{symbol}` instruction at position {position}", position))


def input_decode_failure(position: int, reason: str) -> VMError:
    return VMError(Fault('InputDecodeFailure', f"cannot read input at position {position}: {reason}", position))


def tape_bounds(position: int, cursor: int) -> VMError:
    return VMError(Fault('TapeBounds', f"data cursor moved off the tape to {cursor} at position {position}", position))
