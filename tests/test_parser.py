import sys

import pytest

from lumen.ast import (
    Block, BinaryOp, Call, ForLoop, FuncDecl, FuncParam, IfBranch, IfExpr,
    IntegerLiteral, StringLiteral, UnaryOp, VarAccess, VarDecl,
)
from lumen.errors import ParseError
from lumen.parser import parse_program


def single(source):
    program = parse_program(source)
    assert len(program.expressions) == 1
    return program.expressions[0]


def test_multiplication_binds_tighter():
    assert single('2 + 3 * 4') == BinaryOp('+', IntegerLiteral(2), BinaryOp('*', IntegerLiteral(3), IntegerLiteral(4)))


def test_exponent_is_right_associative():
    assert single('2 ^ 3 ^ 2') == BinaryOp('^', IntegerLiteral(2), BinaryOp('^', IntegerLiteral(3), IntegerLiteral(2)))


def test_exponent_with_signed_operand():
    assert single('2 ^ -1') == BinaryOp('^', IntegerLiteral(2), UnaryOp('-', IntegerLiteral(1)))


def test_subtraction_is_left_associative():
    assert single('1 - 2 - 3') == BinaryOp('-', BinaryOp('-', IntegerLiteral(1), IntegerLiteral(2)), IntegerLiteral(3))


def test_assignment_is_loosest_and_left_associative():
    a, b, c = VarAccess('a'), VarAccess('b'), VarAccess('c')
    assert single('a <- b || c') == BinaryOp('<-', a, BinaryOp('||', b, c))
    assert single('a <- b <- c') == BinaryOp('<-', BinaryOp('<-', a, b), c)


def test_comparison_chain_folds_left():
    a, b, c = VarAccess('a'), VarAccess('b'), VarAccess('c')
    assert single('a < b < c') == BinaryOp('<', BinaryOp('<', a, b), c)
    assert single('a == b != c') == BinaryOp('!=', BinaryOp('==', a, b), c)


def test_or_binds_looser_than_and():
    a, b, c = VarAccess('a'), VarAccess('b'), VarAccess('c')
    assert single('a || b && c') == BinaryOp('||', a, BinaryOp('&&', b, c))


def test_not_applies_to_comparison():
    assert single('!a == b') == UnaryOp('!', BinaryOp('==', VarAccess('a'), VarAccess('b')))


def test_unary_minus_applies_to_product():
    assert single('-2 * 3') == UnaryOp('-', BinaryOp('*', IntegerLiteral(2), IntegerLiteral(3)))


def test_parentheses():
    assert single('(2 + 3) * 4') == BinaryOp('*', BinaryOp('+', IntegerLiteral(2), IntegerLiteral(3)), IntegerLiteral(4))


def test_call_versus_access():
    assert single('f') == VarAccess('f')
    assert single('f()') == Call('f', ())
    assert single('f(1, "a")') == Call('f', (IntegerLiteral(1), StringLiteral('a')))


def test_var_decl():
    assert single('var x:int <- 1 + 2') == VarDecl('x', 'int', BinaryOp('+', IntegerLiteral(1), IntegerLiteral(2)))


def test_func_decl():
    node = single('fun add(a:int, b:int)\n  a + b\nend')
    assert node == FuncDecl(
        'add',
        (FuncParam('a', 'int'), FuncParam('b', 'int')),
        Block((BinaryOp('+', VarAccess('a'), VarAccess('b')),)),
    )


def test_if_chain():
    node = single('if a then 1 else if b then 2 else 3 end')
    assert node == IfExpr(
        (
            IfBranch(VarAccess('a'), Block((IntegerLiteral(1),))),
            IfBranch(VarAccess('b'), Block((IntegerLiteral(2),))),
        ),
        Block((IntegerLiteral(3),)),
    )


def test_if_without_else():
    assert single('if a then\n  1\nend') == IfExpr((IfBranch(VarAccess('a'), Block((IntegerLiteral(1),))),), None)


def test_for_loop_with_block_condition():
    node = single('for\n  i <- i + 1\n  i < 3\ndo\n  print(i)\nend')
    assert isinstance(node, ForLoop)
    assert len(node.condition.expressions) == 2
    assert node.body == Block((Call('print', (VarAccess('i'),)),))


def test_semicolon_separates_expressions():
    assert parse_program('1; 2').expressions == (IntegerLiteral(1), IntegerLiteral(2))


def test_empty_program():
    assert parse_program('') == Block(())
    assert parse_program('\n// nothing\n') == Block(())


def test_error_position():
    with pytest.raises(ParseError) as excinfo:
        parse_program('var 5', 'demo.lum')
    assert (excinfo.value.line, excinfo.value.column) == (1, 5)
    assert 'IDENTIFIER' in excinfo.value.message
    assert str(excinfo.value).endswith('at demo.lum:1:5')


def test_missing_closing_paren():
    with pytest.raises(ParseError, match='RPAREN'):
        parse_program('(1 + 2')


def test_missing_end():
    with pytest.raises(ParseError, match='END'):
        parse_program('if 1 then 2')


def test_unexpected_token():
    with pytest.raises(ParseError):
        parse_program('print(1,)')
    with pytest.raises(ParseError):
        parse_program('1 end')


def test_integer_literal_over_digit_limit():
    limit = getattr(sys, 'get_int_max_str_digits', lambda: 0)()
    if not limit:
        pytest.skip('no int to str digit limit on this interpreter')
    digits = '1' * (limit + 1)
    with pytest.raises(ParseError, match='integer literal too long') as excinfo:
        parse_program(f'1\n  {digits}', 'demo.lum')
    assert (excinfo.value.line, excinfo.value.column) == (2, 3)
