"""Runtime values and type tags for Lumen.

The value set is closed: integers, strings, user functions, builtin
functions and the single `VOID` value. Integers and strings are mutable
cells: assignment rewrites their payload in place, so every binding that
refers to the same cell observes the change. For that reason values
compare by identity, never by payload.

Functions are stored under an overload key: the function name followed by
the type tag of each parameter, e.g. ``add<int><int>``. A call site builds
the same key from the runtime tags of its evaluated arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Tuple

from .ast import Block
from .errors import ConversionError, LumenTypeError


INT_TAG = '<int>'
STRING_TAG = '<string>'
FUNCTION_TAG = '<fun>'
VOID_TAG = '<void>'

TYPE_NAMES: Dict[str, str] = {
    'int': INT_TAG,
    'string': STRING_TAG,
    'fun': FUNCTION_TAG,
    'void': VOID_TAG,
}


def tag_for_type_name(name: str) -> str:
    """Map a declared type name (``int``, ``string``, ``fun``, ``void``) to its tag."""
    try:
        return TYPE_NAMES[name]
    except KeyError:
        raise LumenTypeError(f'unknown type {name!r}, expected "int", "string", "fun" or "void"')


@dataclass(eq=False)
class IntegerVal:
    value: int
    tag: ClassVar[str] = INT_TAG

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(eq=False)
class StringVal:
    value: str
    tag: ClassVar[str] = STRING_TAG

    def __repr__(self) -> str:
        return f"String({self.value!r})"


Param = Tuple[str, str]  # (name, type tag)


@dataclass(eq=False)
class FunctionVal:
    """A user-defined function: its overload key, parameters and body."""
    key: str
    params: Tuple[Param, ...]
    body: Block
    tag: ClassVar[str] = FUNCTION_TAG

    def __repr__(self) -> str:
        return f"<function {self.key}>"


@dataclass(eq=False)
class BuiltinFunctionVal:
    """A function implemented in Python.

    The callback receives the call's environment, in which every
    parameter is already bound by name, and returns a Lumen value.
    """
    key: str
    params: Tuple[Param, ...]
    fn: Callable[[Any], Any]
    tag: ClassVar[str] = FUNCTION_TAG

    def __repr__(self) -> str:
        return f"<builtin {self.key}>"


class VoidVal:
    """Marker object for the Lumen `Void` value."""
    tag = VOID_TAG

    def __repr__(self) -> str:
        return 'Void'


VOID = VoidVal()


def type_name(value: Any) -> str:
    """Return the type tag of a runtime value."""
    return getattr(value, 'tag', type(value).__name__)


def decimal(number: int) -> str:
    """Decimal text of an integer payload."""
    try:
        return str(number)
    except ValueError as e:
        # capped by sys.get_int_max_str_digits()
        raise ConversionError(f"cannot convert integer to text: {e}")


def mangle_declared(name: str, tags: Iterable[str]) -> str:
    """Overload key of a declaration: name plus its parameter tags in order."""
    return name + ''.join(tags)


def mangle_call(name: str, args: List[Any]) -> str:
    """Overload key of a call site: name plus the runtime tags of the arguments."""
    return name + ''.join(type_name(arg) for arg in args)


def display(value: Any) -> str:
    """Textual form of a value, as written by `print`."""
    if isinstance(value, IntegerVal):
        return decimal(value.value)
    if isinstance(value, StringVal):
        return value.value
    if isinstance(value, FunctionVal):
        return f"fun {value.key}"
    if isinstance(value, BuiltinFunctionVal):
        return f"[builtin] fun {value.key}"
    if isinstance(value, VoidVal):
        return VOID_TAG
    return str(value)
