# Tape machine package
# This package provides a compiler and execution engine for the 8-instruction tape language.
from .instructions import Instruction, Program
from .compiler import compile_program, compile_file
from .engine import Engine, TAPE_SIZE, run_program
from .errors import Fault, VMError

__all__ = [
    'Instruction',
    'Program',
    'compile_program',
    'compile_file',
    'Engine',
    'TAPE_SIZE',
    'run_program',
    'Fault',
    'VMError',
]
