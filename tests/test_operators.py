import pytest

from lumen import operators
from lumen.errors import ArithmeticFault, ConversionError, LumenTypeError
from lumen.types import VOID, BuiltinFunctionVal, FunctionVal, IntegerVal, StringVal, display


def i(n):
    return IntegerVal(n)


def s(text):
    return StringVal(text)


def test_division_truncates_toward_zero():
    for a, b, quotient, remainder in [(7, 2, 3, 1), (-7, 2, -3, -1), (7, -2, -3, 1), (-7, -2, 3, -1)]:
        assert operators.div(i(a), i(b)).value == quotient
        assert operators.mod(i(a), i(b)).value == remainder


def test_division_by_zero():
    with pytest.raises(ArithmeticFault):
        operators.div(i(1), i(0))
    with pytest.raises(ArithmeticFault):
        operators.mod(i(1), i(0))


def test_power():
    assert operators.pow(i(2), i(10)).value == 1024
    assert operators.pow(i(2), i(100)).value == 2 ** 100
    assert operators.pow(i(2), i(-1)).value == 0
    assert operators.pow(i(1), i(-5)).value == 1
    assert operators.pow(i(-1), i(-3)).value == -1
    with pytest.raises(ArithmeticFault):
        operators.pow(i(0), i(-1))


def test_concatenation_with_integers():
    assert operators.add(s('n='), i(4)).value == 'n=4'
    assert operators.add(i(4), s('th')).value == '4th'
    assert operators.add(s('a'), s('b')).value == 'ab'


def test_string_repetition():
    assert operators.mul(s('ab'), i(3)).value == 'ababab'
    assert operators.mul(s('ab'), i(0)).value == ''
    assert operators.mul(s('ab'), i(-2)).value == ''
    with pytest.raises(LumenTypeError):
        operators.mul(i(3), s('ab'))


def test_operations_produce_fresh_values():
    a = i(1)
    result = operators.add(a, i(0))
    assert result is not a
    assert a.value == 1


def test_assign_mutates_in_place():
    target = i(1)
    source = i(5)
    result = operators.assign(target, source)
    assert result is source
    assert target.value == 5
    text = s('old')
    operators.assign(text, s('new'))
    assert text.value == 'new'


def test_assign_across_types_is_a_type_error():
    with pytest.raises(LumenTypeError, match='assign'):
        operators.assign(i(1), s('x'))


def test_type_error_message_names_operands():
    with pytest.raises(LumenTypeError) as excinfo:
        operators.sub(s('a'), i(1))
    assert '<string> - <int>' in str(excinfo.value)
    assert str(excinfo.value).startswith('TypeError: ')


def test_comparisons():
    assert operators.less_than(i(1), i(2)).value == 1
    assert operators.greater_or_equal(i(1), i(2)).value == 0
    assert operators.less_than(s('apple'), s('banana')).value == 1
    assert operators.equals(s('x'), s('x')).value == 1
    assert operators.not_equals(i(1), i(2)).value == 1
    with pytest.raises(LumenTypeError):
        operators.equals(i(1), s('1'))


def test_void_equality():
    assert operators.equals(VOID, VOID).value == 1
    assert operators.equals(VOID, i(0)).value == 0
    assert operators.not_equals(s(''), VOID).value == 1


def test_truthiness():
    assert operators.truthy(i(3)) is True
    assert operators.truthy(i(0)) is False
    assert operators.truthy(s('x')) is True
    assert operators.truthy(s('')) is False
    assert operators.truthy(VOID) is False
    func = BuiltinFunctionVal('f', (), lambda env: VOID)
    with pytest.raises(LumenTypeError):
        operators.truthy(func)


def test_logical_operators():
    assert operators.and_and(i(2), s('x')).value == 1
    assert operators.and_and(i(2), VOID).value == 0
    assert operators.or_or(i(0), s('x')).value == 1
    assert operators.or_or(i(0), s('')).value == 0
    assert operators.not_(i(0)).value == 1


def test_negate():
    assert operators.negate(i(5)).value == -5
    with pytest.raises(LumenTypeError):
        operators.negate(s('5'))


def test_to_integer():
    for text, expected in [('42', 42), ('+5', 5), ('-12', -12), ('007', 7)]:
        assert operators.to_integer(s(text)).value == expected


def test_to_integer_rejects_anything_but_signed_digits():
    for text in ['', ' 5', '5_0', '1.5', 'abc', '-', '٣']:
        with pytest.raises(ConversionError):
            operators.to_integer(s(text))


def test_to_string():
    assert operators.to_string(i(-3)).value == '-3'
    text = s('same')
    assert operators.to_string(text) is text


def test_apply_by_symbol():
    assert operators.apply_binary('+', i(2), i(3)).value == 5
    assert operators.apply_unary('-', i(2)).value == -2
    assert operators.apply_unary('!', i(2)).value == 0
    with pytest.raises(NotImplementedError):
        operators.apply_binary('**', i(2), i(3))


def test_display():
    assert display(i(7)) == '7'
    assert display(s('hi')) == 'hi'
    assert display(VOID) == '<void>'
    assert display(FunctionVal('g<int>', (('x', '<int>'),), None)) == 'fun g<int>'
    assert display(BuiltinFunctionVal('print<int>', (), None)) == '[builtin] fun print<int>'
