from pathlib import Path

from lumen.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_precedence(capsys):
    with open(EXAMPLES / 'program_1.lum', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # division and modulo truncate toward zero; unary minus binds looser than ^
    assert out_lines == ['Hello, world', '14', '512', '-3', '-1', '-4']
