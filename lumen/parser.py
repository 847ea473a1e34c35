"""Recursive-descent parser for the Lumen language.

The parser consumes the token list produced by `lumen.lexer.tokenize`
and builds an AST whose root is a single `Block`. Operator precedence is
handled by precedence climbing, one method per level, from loosest to
tightest:

    assignment   <-                       (left-assoc)
    or           ||
    and          &&
    comparison   prefix !, == != > >= < <=
    additive     + -
    multiplicative  prefix + -, * / %
    exponent     ^                        (right-assoc)
    atom

Every level except exponent parses one operand at the next tighter level
and then folds further operands in while the current token is one of its
operators, producing a left-associative chain of `BinaryOp` nodes.

A block is a run of expressions separated by newlines. It ends, without
consuming it, at one of `EOF`, `end`, `else` or `do`.
"""

from __future__ import annotations

from typing import Callable, FrozenSet, List, Optional, Union

from .ast import (
    Block, BinaryOp, Call, ForLoop, FuncDecl, FuncParam, IfBranch, IfExpr,
    IntegerLiteral, Node, StringLiteral, UnaryOp, VarAccess, VarDecl,
)
from .errors import ParseError
from .lexer import Token, tokenize


END_BLOCK = frozenset({'EOF', 'END', 'ELSE', 'DO'})

ASSIGN_OPS = frozenset({'ASSIGN'})
OR_OPS = frozenset({'OROR'})
AND_OPS = frozenset({'ANDAND'})
COMPARISON_OPS = frozenset({'EQ', 'NE', 'GT', 'GE', 'LT', 'LE'})
ADDITIVE_OPS = frozenset({'PLUS', 'MINUS'})
MULTIPLICATIVE_OPS = frozenset({'STAR', 'SLASH', 'PERCENT'})
EXPONENT_OPS = frozenset({'CARET'})


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        # past the end behaves like a trailing EOF
        last = self.tokens[-1] if self.tokens else Token('EOF', '<EOF>', 1, 1)
        return Token('EOF', '<EOF>', last.line, last.column, last.source)

    def advance(self) -> Token:
        token = self.peek()
        if self.pos < len(self.tokens):
            self.pos += 1
        return token

    def match(self, expected: Union[str, FrozenSet[str]]) -> bool:
        token = self.peek()
        if isinstance(expected, str):
            return token.type == expected
        return token.type in expected

    def consume(self, expected: str) -> Token:
        token = self.peek()
        if token.type != expected:
            raise ParseError(f"expected <{expected}>, got <{token.type}> {token.value!r}",
                             token.line, token.column, token.source)
        return self.advance()

    def skip_newline(self):
        if self.match('NEWLINE'):
            self.advance()

    def parse_program(self) -> Block:
        program = self.parse_block()
        self.consume('EOF')
        return program

    def parse_block(self) -> Block:
        expressions: List[Node] = []
        while not self.match(END_BLOCK):
            expressions.append(self.parse_expression())
            self.skip_newline()
        return Block(tuple(expressions))

    # Expression parsing (precedence climbing)
    def parse_expression(self) -> Node:
        return self.parse_assign()

    def fold(self, operand: Callable[[], Node], operators: FrozenSet[str],
             right: Optional[Callable[[], Node]] = None) -> Node:
        right = right or operand
        node = operand()
        while self.match(operators):
            op_token = self.advance()
            node = BinaryOp(op_token.value, node, right())
        return node

    def parse_assign(self) -> Node:
        return self.fold(self.parse_or, ASSIGN_OPS)

    def parse_or(self) -> Node:
        return self.fold(self.parse_and, OR_OPS)

    def parse_and(self) -> Node:
        return self.fold(self.parse_comparison, AND_OPS)

    def parse_comparison(self) -> Node:
        if self.match('NOT'):
            op_token = self.advance()
            return UnaryOp(op_token.value, self.parse_comparison())
        return self.fold(self.parse_additive, COMPARISON_OPS)

    def parse_additive(self) -> Node:
        return self.fold(self.parse_multiplicative, ADDITIVE_OPS)

    def parse_multiplicative(self) -> Node:
        if self.match(ADDITIVE_OPS):
            op_token = self.advance()
            return UnaryOp(op_token.value, self.parse_multiplicative())
        return self.fold(self.parse_exponent, MULTIPLICATIVE_OPS)

    def parse_exponent(self) -> Node:
        return self.fold(self.parse_atom, EXPONENT_OPS, self.parse_exponent_operand)

    def parse_exponent_operand(self) -> Node:
        # right operand of ^: recurse for right associativity, allow a sign (2 ^ -1)
        if self.match(ADDITIVE_OPS):
            op_token = self.advance()
            return UnaryOp(op_token.value, self.parse_exponent_operand())
        return self.parse_exponent()

    def parse_atom(self) -> Node:
        token = self.peek()
        if token.type == 'FUN':
            return self.parse_func_decl()
        if token.type == 'LPAREN':
            self.advance()
            expr = self.parse_expression()
            self.consume('RPAREN')
            return expr
        if token.type == 'INTEGER':
            self.advance()
            try:
                return IntegerLiteral(int(token.value))
            except ValueError:
                raise ParseError(f"integer literal too long ({len(token.value)} digits)",
                                 token.line, token.column, token.source)
        if token.type == 'STRING':
            self.advance()
            return StringLiteral(token.value)
        if token.type == 'IF':
            return self.parse_if()
        if token.type == 'VAR':
            return self.parse_var_decl()
        if token.type == 'IDENTIFIER':
            self.advance()
            if self.match('LPAREN'):
                return Call(token.value, self.parse_call_args())
            return VarAccess(token.value)
        if token.type == 'FOR':
            return self.parse_for()
        raise ParseError(
            f"expected <FUN>, <LPAREN>, <INTEGER>, <STRING>, <IF>, <VAR>, <IDENTIFIER> or <FOR>, "
            f"got <{token.type}> {token.value!r}",
            token.line, token.column, token.source)

    def parse_call_args(self) -> tuple:
        self.consume('LPAREN')
        args: List[Node] = []
        if not self.match('RPAREN'):
            args.append(self.parse_expression())
            while self.match('COMMA'):
                self.advance()
                args.append(self.parse_expression())
        self.consume('RPAREN')
        return tuple(args)

    def parse_for(self) -> ForLoop:
        # for (Block) do [newline] (Block) end
        self.consume('FOR')
        self.skip_newline()
        condition = self.parse_block()
        self.consume('DO')
        self.skip_newline()
        body = self.parse_block()
        self.consume('END')
        return ForLoop(condition, body)

    def parse_var_decl(self) -> VarDecl:
        # var name : type <- expr
        self.consume('VAR')
        name_token = self.consume('IDENTIFIER')
        self.consume('COLON')
        type_token = self.consume('IDENTIFIER')
        self.consume('ASSIGN')
        value = self.parse_expression()
        return VarDecl(name_token.value, type_token.value, value)

    def parse_if_branch(self) -> IfBranch:
        self.consume('IF')
        condition = self.parse_expression()
        self.consume('THEN')
        self.skip_newline()
        return IfBranch(condition, self.parse_block())

    def parse_if(self) -> IfExpr:
        branches: List[IfBranch] = [self.parse_if_branch()]
        else_block: Optional[Block] = None
        while self.match('ELSE'):
            self.advance()
            if self.match('IF'):
                branches.append(self.parse_if_branch())
                continue
            self.skip_newline()
            else_block = self.parse_block()
            break
        self.consume('END')
        return IfExpr(tuple(branches), else_block)

    def parse_param(self) -> FuncParam:
        name_token = self.consume('IDENTIFIER')
        self.consume('COLON')
        type_token = self.consume('IDENTIFIER')
        return FuncParam(name_token.value, type_token.value)

    def parse_func_decl(self) -> FuncDecl:
        # fun name(a:int, b:string) [newline] (Block) end
        self.consume('FUN')
        name_token = self.consume('IDENTIFIER')
        self.consume('LPAREN')
        params: List[FuncParam] = []
        if self.match('IDENTIFIER'):
            params.append(self.parse_param())
            while self.match('COMMA'):
                self.advance()
                params.append(self.parse_param())
        self.consume('RPAREN')
        self.skip_newline()
        body = self.parse_block()
        self.consume('END')
        return FuncDecl(name_token.value, tuple(params), body)


def parse(tokens: List[Token]) -> Block:
    """Parse a token list into the program's root `Block`."""
    return Parser(tokens).parse_program()


def parse_program(source: str, source_name: str = '<input>') -> Block:
    """Tokenize and parse Lumen source code into the program's root `Block`."""
    return parse(tokenize(source, source_name))
