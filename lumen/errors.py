from typing import Optional


class LumenError(Exception):
    """Base exception for every failure raised by the Lumen toolchain.

    Each subclass carries a short `name` used when the error is reported
    to a user, e.g. ``TypeError: cannot add <int> and <fun>``.
    """
    name = 'Error'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None,
                 source: Optional[str] = None):
        self.message = message
        self.line = line
        self.column = column
        self.source = source
        super().__init__(f"{self.name}: {message}{self.location()}")

    def location(self) -> str:
        if self.line is None:
            return ''
        return f" at {self.source or '<input>'}:{self.line}:{self.column}"


class LexError(LumenError):
    name = 'LexError'


class ParseError(LumenError):
    name = 'ParseError'


class ResolutionError(LumenError):
    """An identifier or overload key was not found in any enclosing scope."""
    name = 'ResolutionError'


class ArityError(LumenError):
    name = 'ArityError'


class LumenTypeError(LumenError):
    name = 'TypeError'


class ArithmeticFault(LumenError):
    name = 'ArithmeticFault'


class ConversionError(LumenError):
    name = 'ConversionError'


class EmptyBlockError(LumenError):
    name = 'EmptyBlockError'
