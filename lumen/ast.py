"""Abstract Syntax Tree (AST) definitions for the Lumen language.

The AST classes defined in this module represent the syntactic structure
of parsed Lumen programs. A whole program is a single `Block`. Nodes are
frozen once the parser has built them; child sequences are tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class IntegerLiteral(Node):
    value: int


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str


@dataclass(frozen=True)
class Block(Node):
    expressions: Tuple[Node, ...]


@dataclass(frozen=True)
class VarDecl(Node):
    name: str
    type_name: str  # declared, never checked
    value: Node


@dataclass(frozen=True)
class VarAccess(Node):
    name: str


@dataclass(frozen=True)
class FuncParam:
    name: str
    type_name: str


@dataclass(frozen=True)
class FuncDecl(Node):
    name: str
    params: Tuple[FuncParam, ...]
    body: Block


@dataclass(frozen=True)
class Call(Node):
    name: str
    args: Tuple[Node, ...]


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass(frozen=True)
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass(frozen=True)
class IfBranch:
    condition: Node
    body: Block


@dataclass(frozen=True)
class IfExpr(Node):
    branches: Tuple[IfBranch, ...]
    else_block: Optional[Block]


@dataclass(frozen=True)
class ForLoop(Node):
    condition: Block
    body: Block
