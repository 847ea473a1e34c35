"""CLI entry point for the Lumen interpreter.

Usage:
    python -m lumen [-v|-vv|-vvv] <program_file>
    python -m lumen [-v...] --emit-ast <program_file>
    python -m lumen [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lum file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero: function calls at -v, declarations at
-vv, branch and loop conditions at -vvv.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import LumenError
from .interpreter import Interpreter
from .parser import parse_program


def read_existing(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='lumen', description="Lumen language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LUMEN_FILE', help='emit AST JSON for the given .lum file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Lumen program file (.lum) to execute')
    args = parser.parse_args(argv)

    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            program = parse_program(read_existing(program_file), str(program_file))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            program = ast_from_obj(json.loads(read_existing(Path(args.ast))))
            Interpreter(debug_level=args.v).run(program)
            return

        # Default: execute source file
        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast')
        program_file = Path(args.program)
        program = parse_program(read_existing(program_file), str(program_file))
        Interpreter(debug_level=args.v).run(program)
    except LumenError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
