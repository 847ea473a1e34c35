"""Tokenizer for the Lumen language.

Terminals are declared as a lark grammar and scanned with lark's basic
lexer in lexer-only mode. The raw lark tokens are then normalised into
the token stream the parser expects:

* a line break and ``;`` both become a single ``NEWLINE`` token, and
  runs of them (or newlines at the very start of the input) collapse so
  that two ``NEWLINE`` tokens never follow each other;
* string literals are unquoted and their escapes decoded;
* an ``EOF`` token terminates the stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError


@dataclass
class Token:
    type: str
    value: str
    line: int
    column: int
    source: str = '<input>'

    def position(self) -> str:
        return f"{self.source}:{self.line}:{self.column}"


LUMEN_TERMINALS = r"""
    IF: "if"
    ELSE: "else"
    END: "end"
    THEN: "then"
    FUN: "fun"
    FOR: "for"
    DO: "do"
    VAR: "var"

    IDENTIFIER: /[^\W\d]\w*/
    INTEGER: /[0-9]+/
    STRING.2: /"(\\.|[^"\\])*"/
    UNTERMINATED_STRING.1: /"(\\.|[^"\\])*/

    ASSIGN: "<-"
    EQ: "=="
    NE: "!="
    LE: "<="
    GE: ">="
    ANDAND: "&&"
    OROR: "||"
    LT: "<"
    GT: ">"
    NOT: "!"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    CARET: "^"
    LPAREN: "("
    RPAREN: ")"
    COLON: ":"
    COMMA: ","
    SEMICOLON: ";"
    LINEBREAK: /\n/

    BLOCK_COMMENT.2: /\/\*[\s\S]*?\*\//
    UNTERMINATED_COMMENT.1: "/*"
    LINE_COMMENT: /\/\/[^\n]*/
    WS: /[ \t\r]+/

    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""


LUMEN_LEXER = Lark(LUMEN_TERMINALS, parser=None, lexer='basic')

ESCAPES = {
    'n': '\n',
    'r': '\r',
    'b': '\b',
    't': '\t',
    '0': '\0',
    '"': '"',
    '\\': '\\',
}


def unescape(raw: str, line: int, column: int, source: str) -> str:
    """Decode the body of a string literal (without its quotes)."""
    chars: List[str] = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c == '\\':
            esc = raw[i + 1]
            if esc not in ESCAPES:
                # position of the backslash; `column` is the opening quote
                nl = raw.rfind('\n', 0, i)
                if nl < 0:
                    esc_line, esc_column = line, column + 1 + i
                else:
                    esc_line, esc_column = line + raw.count('\n', 0, i), i - nl
                raise LexError(f"unexpected escape character {esc!r}", esc_line, esc_column, source)
            chars.append(ESCAPES[esc])
            i += 2
            continue
        chars.append(c)
        i += 1
    return ''.join(chars)


def tokenize(source: str, source_name: str = '<input>') -> List[Token]:
    """Convert Lumen source text into a list of tokens ending with EOF."""
    source = source.replace('\r\n', '\n')
    tokens: List[Token] = []
    try:
        for tok in LUMEN_LEXER.lex(source):
            kind = tok.type
            if kind in ('LINEBREAK', 'SEMICOLON'):
                # never put 2 newlines in a row
                if not tokens or tokens[-1].type == 'NEWLINE':
                    continue
                tokens.append(Token('NEWLINE', str(tok), tok.line, tok.column, source_name))
                continue
            if kind == 'UNTERMINATED_STRING':
                raise LexError('unterminated string literal', tok.line, tok.column, source_name)
            if kind == 'UNTERMINATED_COMMENT':
                raise LexError('unterminated block comment', tok.line, tok.column, source_name)
            value = str(tok)
            if kind == 'STRING':
                value = unescape(value[1:-1], tok.line, tok.column, source_name)
            tokens.append(Token(kind, value, tok.line, tok.column, source_name))
    except UnexpectedCharacters as e:
        raise LexError(f"invalid character {e.char!r}", e.line, e.column, source_name)
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    tokens.append(Token('EOF', '<EOF>', line, column, source_name))
    return tokens
