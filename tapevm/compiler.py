"""Compiler for tape machine programs.

Program text is lexed by a Lark grammar whose only meaningful terminals
are the eight instruction symbols. Every run of other characters is
matched by the ``COMMENT`` terminal and ignored, which is how comments and
whitespace are supported: there is no input the grammar rejects, so
compilation never fails.

The parse tree is flattened into a `Program` by `ProgramTransformer`.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, Token

from .instructions import Instruction, Program


TAPE_GRAMMAR = r"""
    start: instruction*

    ?instruction: MOVE_RIGHT
                | MOVE_LEFT
                | INCREMENT
                | DECREMENT
                | OUTPUT
                | INPUT
                | JUMP_FORWARD
                | JUMP_BACKWARD

    MOVE_RIGHT: ">"
    MOVE_LEFT: "<"
    INCREMENT: "+"
    DECREMENT: "-"
    OUTPUT: "."
    INPUT: ","
    JUMP_FORWARD: "["
    JUMP_BACKWARD: "]"

    // Anything that is not an instruction
    COMMENT: /[^<>+\-.,\[\]]+/
    %ignore COMMENT
"""


TAPE_PARSER = Lark(
    TAPE_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


class ProgramTransformer(Transformer):
    """Transforms the instruction parse tree into a Program."""

    def start(self, items: List[Token]) -> Program:
        # the lexer already dropped every non-instruction character
        return Program(tuple(Instruction.from_char(str(token)) for token in items))


def compile_program(source: str) -> Program:
    """Compile program text into a Program.

    Characters outside the instruction alphabet are discarded, so every
    string compiles, possibly to an empty program.
    """
    tree = TAPE_PARSER.parse(source)
    return ProgramTransformer().transform(tree)


def compile_file(file_path: str) -> Program:
    """Read and compile a program file."""
    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        source = f.read()
    return compile_program(source)
