"""CLI entry point for the tape machine.

Usage:
    python -m tapevm [-v|-vv|-vvv] <program_file>
    python -m tapevm [-v...] --emit-program <program_file>
    python -m tapevm [-v...] --program <program_json_file>

Options:
  -v               Increase debug verbosity (can be repeated)
  --emit-program   Compile the given source file and emit a program JSON file
  --program        Execute a previously emitted program JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Program input is read from stdin and
output is written to stdout, one byte at a time.
"""

import argparse
import json
import sys
from pathlib import Path
from .compiler import compile_program
from .engine import Engine
from .errors import VMError
from .program_json import program_to_obj, program_from_obj


def read_source(program_file: Path) -> str:
    try:
        with open(program_file, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        print(f"Error: {e.strerror}: {program_file}", file=sys.stderr)
        sys.exit(1)


def execute(program, debug_level: int) -> None:
    engine = Engine(program, debug_level=debug_level)
    try:
        engine.run()
    except VMError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e.strerror}: {e.filename or 'output'}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Tape machine interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-program', metavar='SOURCE_FILE', help='emit program JSON for the given source file')
    group.add_argument('--program', metavar='PROGRAM_JSON_FILE', help='execute a program from a JSON file')
    parser.add_argument('source', nargs='?', help='program source file to execute')
    args = parser.parse_args(argv)

    # Emit program mode
    if args.emit_program:
        program_file = Path(args.emit_program)
        program = compile_program(read_source(program_file))
        out_path = program_file.with_name(program_file.name + '.program.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(program), out, indent=2)
        print(str(out_path))
        return

    # Execute from program JSON
    if args.program:
        json_path = Path(args.program)
        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            program = program_from_obj(data)
        except OSError as e:
            print(f"Error: {e.strerror}: {json_path}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}: {json_path}", file=sys.stderr)
            sys.exit(1)
        execute(program, args.v)
        return

    # Default: execute source file
    if not args.source:
        parser.error('missing program file; please specify the path to your program')
    program = compile_program(read_source(Path(args.source)))
    execute(program, args.v)


if __name__ == '__main__':
    main()
