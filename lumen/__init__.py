# Lumen language package
# This package provides a tokenizer, parser and tree-walking interpreter for the Lumen language.
from .errors import LumenError
from .interpreter import Interpreter, run_file, run_program
from .parser import parse, parse_program

__all__ = [
    'run_program',
    'run_file',
    'parse',
    'parse_program',
    'Interpreter',
    'LumenError',
]
