import io
from pathlib import Path

import pytest

from tapevm.compiler import compile_file
from tapevm.engine import Engine, run_program
from tapevm.errors import VMError

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def run(source, data=b''):
    output = io.BytesIO()
    engine = run_program(source, io.BytesIO(data), output)
    return engine, output.getvalue()


def test_comment_only_program_has_no_output():
    engine, out = run('This line has no instructions at all')
    assert engine.halted
    assert engine.steps == 0
    assert out == b''


def test_add_two_and_print():
    engine, out = run('++.')
    assert out == b'\x02'
    assert engine.halted


def test_echo_one_byte():
    _, out = run(',.', b'\x41')
    assert out == b'A'


def test_echo_with_empty_input_prints_zero():
    engine, out = run(',.')
    assert out == b'\x00'
    assert engine.tape[0] == 0


def test_lone_open_bracket_is_fault():
    with pytest.raises(VMError) as excinfo:
        run('[')
    assert excinfo.value.fault.name == 'UnmatchedBracket'
    assert excinfo.value.fault.position == 0


def test_clear_loop_runs_once():
    engine, out = run('+[-]')
    assert engine.tape[0] == 0
    assert engine.steps == 4
    assert out == b''


def test_hello_world_example():
    program = compile_file(str(EXAMPLES / 'hello.b'))
    output = io.BytesIO()
    Engine(program, io.BytesIO(), output).run()
    assert output.getvalue() == b'Hello World!\n'


def test_reverse_three_bytes():
    # read three bytes, then print them backwards
    _, out = run('>,>,>,[.<]', b'abc')
    assert out == b'cba'


def test_multiply_with_nested_loops():
    # 6 * 7 in cell 2, printed as a raw byte
    _, out = run('++++++[>+++++++[>+<-]<-]>>.')
    assert out == bytes([42])
