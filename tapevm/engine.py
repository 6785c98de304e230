"""Execution engine for compiled tape machine programs.

The engine is a plain fetch-decode-execute loop over a `Program`. Loop
brackets are matched on demand: every time a jump is taken the engine
scans the program for the matching bracket by counting nesting depth,
rather than consulting a precomputed jump table. A scan that runs off
either end of the program is an ``UnmatchedBracket`` fault, which means
an unbalanced bracket is only reported once execution actually tries to
jump across it.
"""

from __future__ import annotations

import sys
from typing import BinaryIO, Optional

from .compiler import compile_program
from .errors import VMError, input_decode_failure, tape_bounds, unmatched_bracket
from .instructions import Instruction, Program

TAPE_SIZE = 30000

BRACKETS = (Instruction.JUMP_FORWARD, Instruction.JUMP_BACKWARD)


class Engine:
    """Runs one Program against a fresh zeroed tape."""
    def __init__(
        self,
        program: Program,
        input_stream: Optional[BinaryIO] = None,
        output_stream: Optional[BinaryIO] = None,
        debug_level: int = 0,
        debug_file: str = 'debug.txt',
    ):
        self.program = program
        self.tape = bytearray(TAPE_SIZE)
        self.data_cursor = 0
        self.inst_cursor = 0
        self.steps = 0
        self.input_stream = input_stream if input_stream is not None else sys.stdin.buffer
        self.output_stream = output_stream if output_stream is not None else sys.stdout.buffer
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    @property
    def halted(self) -> bool:
        return self.inst_cursor >= len(self.program)

    @property
    def cell(self) -> int:
        return self.tape[self.data_cursor]

    # Public API
    def run(self) -> 'Engine':
        """Execute until the instruction cursor runs past the program.

        Faults propagate as `VMError`; the engine is left in the state
        it had when the fault was raised. The debug file, if any, is only
        open for the duration of this call.
        """
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w')
        self.debug(f"run: {len(self.program)} instructions")
        try:
            while not self.halted:
                self.step()
        except VMError as e:
            self.debug(f"fault: {e}")
            raise
        finally:
            self.debug(f"halt: steps={self.steps} inst_cursor={self.inst_cursor} data_cursor={self.data_cursor}")
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return self

    def step(self) -> None:
        """Execute the instruction under the instruction cursor.

        Does nothing once the engine has halted.
        """
        if self.halted:
            return
        inst = self.program[self.inst_cursor]
        self.steps += 1
        if self.debug_level >= 3:
            self.debug(f"{self.steps}: {inst.symbol} @{self.inst_cursor} tape[{self.data_cursor}]={self.cell}")

        if inst is Instruction.MOVE_RIGHT:
            self.move_data_cursor(1)
        elif inst is Instruction.MOVE_LEFT:
            self.move_data_cursor(-1)
        elif inst is Instruction.INCREMENT:
            self.tape[self.data_cursor] = (self.cell + 1) % 256
        elif inst is Instruction.DECREMENT:
            self.tape[self.data_cursor] = (self.cell - 1) % 256
        elif inst is Instruction.OUTPUT:
            self.output_stream.write(bytes((self.cell,)))
            self.output_stream.flush()
        elif inst is Instruction.INPUT:
            self.read_cell()
        elif inst is Instruction.JUMP_FORWARD:
            if self.cell == 0:
                self.jump(1)
                return
        elif inst is Instruction.JUMP_BACKWARD:
            if self.cell != 0:
                self.jump(-1)
                return
        self.inst_cursor += 1

    def move_data_cursor(self, offset: int) -> None:
        cursor = self.data_cursor + offset
        if not 0 <= cursor < TAPE_SIZE:
            raise tape_bounds(self.inst_cursor, cursor)
        self.data_cursor = cursor

    def read_cell(self) -> None:
        try:
            data = self.input_stream.read(1)
        except OSError as e:
            raise input_decode_failure(self.inst_cursor, str(e)) from e
        # end of input leaves the cell untouched
        if data:
            self.tape[self.data_cursor] = data[0]

    def jump(self, direction: int) -> None:
        origin = self.inst_cursor
        match = self.find_match(origin, direction)
        self.inst_cursor = match + 1
        if self.debug_level >= 2:
            self.debug(f"jump {self.program[origin].symbol} @{origin} -> {self.inst_cursor}")

    def find_match(self, origin: int, direction: int) -> int:
        """Scan from the bracket at `origin` for its partner.

        `direction` is 1 to scan forward from a `[` and -1 to scan
        backward from a `]`.
        """
        opener = self.program[origin]
        depth = 1
        pos = origin
        while depth != 0:
            pos += direction
            if pos < 0 or pos >= len(self.program):
                raise unmatched_bracket(opener.symbol, origin)
            inst = self.program[pos]
            if inst is opener:
                depth += 1
            elif inst in BRACKETS:
                depth -= 1
        return pos


def run_program(
    source: str,
    input_stream: Optional[BinaryIO] = None,
    output_stream: Optional[BinaryIO] = None,
    debug_level: int = 0,
) -> Engine:
    """Convenience function to compile and run a program from a source string."""
    program = compile_program(source)
    engine = Engine(program, input_stream, output_stream, debug_level=debug_level)
    return engine.run()
