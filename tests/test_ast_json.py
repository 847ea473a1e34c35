import json

from lumen.ast_json import ast_from_obj, ast_to_obj
from lumen.interpreter import Interpreter
from lumen.parser import parse_program

SOURCE = '''
fun label(n:int)
  if n < 0 then "neg" else if n == 0 then "zero" else "pos" end
end
var i:int <- 0 - 1
for i <= 1 do
  print(label(i) + " " + i)
  i <- i + 1
end
print(!(2 ^ -1) && "x")
'''


def test_decoded_tree_equals_parsed_tree():
    program = parse_program(SOURCE)
    encoded = json.loads(json.dumps(ast_to_obj(program)))
    assert ast_from_obj(encoded) == program


def test_decoded_tree_runs_the_same(capsys):
    program = parse_program(SOURCE)
    Interpreter().run(program)
    expected = capsys.readouterr().out
    Interpreter().run(ast_from_obj(json.loads(json.dumps(ast_to_obj(program)))))
    assert capsys.readouterr().out == expected
    assert expected.split('\n')[:3] == ['neg -1', 'zero 0', 'pos 1']
