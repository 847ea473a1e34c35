"""Operator semantics for Lumen values.

Binary operators are looked up in a table keyed by
``(operation, left tag, right tag)``; unary ones by ``(operation, tag)``.
Any combination missing from the tables is a type error naming the
operation and the operand types. There is no implicit coercion between
types except string concatenation with an integer on either side and
repetition of a string by an integer.

Comparison and logical operators produce the integers 1 and 0.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from .errors import ArithmeticFault, ConversionError, LumenTypeError
from .types import (
    INT_TAG, STRING_TAG, VOID_TAG, VOID,
    IntegerVal, StringVal, decimal, type_name,
)


BINARY_TABLE: Dict[Tuple[str, str, str], Callable[[Any, Any], Any]] = {}
UNARY_TABLE: Dict[Tuple[str, str], Callable[[Any], Any]] = {}

SYMBOLS = {
    'add': '+', 'sub': '-', 'mul': '*', 'div': '/', 'mod': '%', 'pow': '^',
    'equals': '==', 'less_than': '<', 'less_or_equal': '<=',
    'greater_than': '>', 'greater_or_equal': '>=', 'assign': '<-',
}


def binary(operation: str, left_tag: str, right_tag: str):
    def register(fn):
        BINARY_TABLE[(operation, left_tag, right_tag)] = fn
        return fn
    return register


def unary(operation: str, tag: str):
    def register(fn):
        UNARY_TABLE[(operation, tag)] = fn
        return fn
    return register


def dispatch_binary(operation: str, left: Any, right: Any) -> Any:
    handler = BINARY_TABLE.get((operation, type_name(left), type_name(right)))
    if handler is None:
        raise LumenTypeError(
            f"unsupported operation {operation}: {type_name(left)} {SYMBOLS[operation]} {type_name(right)}")
    return handler(left, right)


def dispatch_unary(operation: str, operand: Any) -> Any:
    handler = UNARY_TABLE.get((operation, type_name(operand)))
    if handler is None:
        raise LumenTypeError(f"unsupported operation {operation} on {type_name(operand)}")
    return handler(operand)


def boolean(flag: bool) -> IntegerVal:
    return IntegerVal(1 if flag else 0)


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    if b == 0:
        raise ArithmeticFault('division by zero')
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


###############################################################################
# Integer
###############################################################################

@binary('add', INT_TAG, INT_TAG)
def _int_add(a, b):
    return IntegerVal(a.value + b.value)


@binary('add', INT_TAG, STRING_TAG)
def _int_add_string(a, b):
    return StringVal(decimal(a.value) + b.value)


@binary('sub', INT_TAG, INT_TAG)
def _int_sub(a, b):
    return IntegerVal(a.value - b.value)


@binary('mul', INT_TAG, INT_TAG)
def _int_mul(a, b):
    return IntegerVal(a.value * b.value)


@binary('div', INT_TAG, INT_TAG)
def _int_div(a, b):
    return IntegerVal(trunc_div(a.value, b.value))


@binary('mod', INT_TAG, INT_TAG)
def _int_mod(a, b):
    if b.value == 0:
        raise ArithmeticFault('modulo by zero')
    # remainder takes the sign of the dividend
    return IntegerVal(a.value - b.value * trunc_div(a.value, b.value))


@binary('pow', INT_TAG, INT_TAG)
def _int_pow(a, b):
    base, exponent = a.value, b.value
    if exponent >= 0:
        return IntegerVal(base ** exponent)
    if base == 0:
        raise ArithmeticFault('zero raised to a negative power')
    # 1 / base^n truncated toward zero
    if abs(base) == 1:
        return IntegerVal(base ** -exponent)
    return IntegerVal(0)


@binary('equals', INT_TAG, INT_TAG)
def _int_equals(a, b):
    return boolean(a.value == b.value)


@binary('less_than', INT_TAG, INT_TAG)
def _int_less_than(a, b):
    return boolean(a.value < b.value)


@binary('less_or_equal', INT_TAG, INT_TAG)
def _int_less_or_equal(a, b):
    return boolean(a.value <= b.value)


@binary('greater_than', INT_TAG, INT_TAG)
def _int_greater_than(a, b):
    return boolean(a.value > b.value)


@binary('greater_or_equal', INT_TAG, INT_TAG)
def _int_greater_or_equal(a, b):
    return boolean(a.value >= b.value)


@binary('assign', INT_TAG, INT_TAG)
def _int_assign(a, b):
    a.value = b.value
    return b


@unary('truthy', INT_TAG)
def _int_truthy(a):
    return a.value != 0


@unary('negate', INT_TAG)
def _int_negate(a):
    return IntegerVal(-a.value)


@unary('to_integer', INT_TAG)
def _int_to_integer(a):
    return a


@unary('to_string', INT_TAG)
def _int_to_string(a):
    return StringVal(decimal(a.value))


###############################################################################
# String
###############################################################################

@binary('add', STRING_TAG, STRING_TAG)
def _string_add(a, b):
    return StringVal(a.value + b.value)


@binary('add', STRING_TAG, INT_TAG)
def _string_add_int(a, b):
    return StringVal(a.value + decimal(b.value))


@binary('mul', STRING_TAG, INT_TAG)
def _string_repeat(a, b):
    return StringVal(a.value * max(0, b.value))


@binary('equals', STRING_TAG, STRING_TAG)
def _string_equals(a, b):
    return boolean(a.value == b.value)


@binary('less_than', STRING_TAG, STRING_TAG)
def _string_less_than(a, b):
    return boolean(a.value < b.value)


@binary('less_or_equal', STRING_TAG, STRING_TAG)
def _string_less_or_equal(a, b):
    return boolean(a.value <= b.value)


@binary('greater_than', STRING_TAG, STRING_TAG)
def _string_greater_than(a, b):
    return boolean(a.value > b.value)


@binary('greater_or_equal', STRING_TAG, STRING_TAG)
def _string_greater_or_equal(a, b):
    return boolean(a.value >= b.value)


@binary('assign', STRING_TAG, STRING_TAG)
def _string_assign(a, b):
    a.value = b.value
    return b


@unary('truthy', STRING_TAG)
def _string_truthy(a):
    return len(a.value) != 0


@unary('to_integer', STRING_TAG)
def _string_to_integer(a):
    text = a.value
    digits = text[1:] if text[:1] in ('+', '-') else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ConversionError(f'cannot parse int from {text!r}')
    try:
        return IntegerVal(int(text))
    except ValueError as e:
        raise ConversionError(f"cannot parse int from text: {e}")


@unary('to_string', STRING_TAG)
def _string_to_string(a):
    return a


###############################################################################
# Void
###############################################################################

@unary('truthy', VOID_TAG)
def _void_truthy(a):
    return False


###############################################################################
# Operator contract
###############################################################################

def add(left, right):
    return dispatch_binary('add', left, right)


def sub(left, right):
    return dispatch_binary('sub', left, right)


def mul(left, right):
    return dispatch_binary('mul', left, right)


def div(left, right):
    return dispatch_binary('div', left, right)


def mod(left, right):
    return dispatch_binary('mod', left, right)


def pow(left, right):
    return dispatch_binary('pow', left, right)


def equals(left, right):
    if left is VOID or right is VOID:
        return boolean(left is right)
    return dispatch_binary('equals', left, right)


def not_equals(left, right):
    return not_(equals(left, right))


def less_than(left, right):
    return dispatch_binary('less_than', left, right)


def less_or_equal(left, right):
    return dispatch_binary('less_or_equal', left, right)


def greater_than(left, right):
    return dispatch_binary('greater_than', left, right)


def greater_or_equal(left, right):
    return dispatch_binary('greater_or_equal', left, right)


def assign(left, right):
    return dispatch_binary('assign', left, right)


def truthy(value) -> bool:
    return dispatch_unary('truthy', value)


def and_and(left, right):
    return boolean(truthy(left) and truthy(right))


def or_or(left, right):
    return boolean(truthy(left) or truthy(right))


def not_(value):
    return boolean(not truthy(value))


def negate(value):
    return dispatch_unary('negate', value)


def to_integer(value):
    return dispatch_unary('to_integer', value)


def to_string(value):
    return dispatch_unary('to_string', value)


BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    '+': add,
    '-': sub,
    '*': mul,
    '/': div,
    '%': mod,
    '^': pow,
    '==': equals,
    '!=': not_equals,
    '<': less_than,
    '<=': less_or_equal,
    '>': greater_than,
    '>=': greater_or_equal,
    '&&': and_and,
    '||': or_or,
    '<-': assign,
}

UNARY_OPERATORS: Dict[str, Callable[[Any], Any]] = {
    '!': not_,
    '-': negate,
    '+': lambda value: value,
}


def apply_binary(op: str, left: Any, right: Any) -> Any:
    try:
        handler = BINARY_OPERATORS[op]
    except KeyError:
        raise NotImplementedError(f"unknown binary operator {op}")
    return handler(left, right)


def apply_unary(op: str, operand: Any) -> Any:
    try:
        handler = UNARY_OPERATORS[op]
    except KeyError:
        raise NotImplementedError(f"unknown unary operator {op}")
    return handler(operand)
