"""JSON serialization/deserialization for the Lumen AST.

This module converts between Lumen AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Decoding an encoded tree
gives back an equal tree, so a program can be parsed once and run many
times from its emitted form.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Block,
    BinaryOp,
    Call,
    ForLoop,
    FuncDecl,
    FuncParam,
    IfBranch,
    IfExpr,
    IntegerLiteral,
    StringLiteral,
    UnaryOp,
    VarAccess,
    VarDecl,
)


def param_to_obj(p: FuncParam) -> Dict[str, Any]:
    return {"name": p.name, "type_name": p.type_name}


def param_from_obj(o: Dict[str, Any]) -> FuncParam:
    return FuncParam(name=o["name"], type_name=o["type_name"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value}
    if isinstance(node, Block):
        return {"type": "Block", "expressions": [ast_to_obj(e) for e in node.expressions]}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": node.name,
            "type_name": node.type_name,
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, VarAccess):
        return {"type": "VarAccess", "name": node.name}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": [param_to_obj(p) for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, IfExpr):
        return {
            "type": "IfExpr",
            "branches": [
                {"condition": ast_to_obj(b.condition), "body": ast_to_obj(b.body)}
                for b in node.branches
            ],
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, ForLoop):
        return {"type": "ForLoop", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "IntegerLiteral":
        return IntegerLiteral(value=int(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(value=obj["value"])
    if t == "Block":
        return Block(expressions=tuple(ast_from_obj(e) for e in obj["expressions"]))
    if t == "VarDecl":
        return VarDecl(name=obj["name"], type_name=obj["type_name"], value=ast_from_obj(obj["value"]))
    if t == "VarAccess":
        return VarAccess(name=obj["name"])
    if t == "FuncDecl":
        return FuncDecl(
            name=obj["name"],
            params=tuple(param_from_obj(p) for p in obj["params"]),
            body=ast_from_obj(obj["body"]),
        )
    if t == "Call":
        return Call(name=obj["name"], args=tuple(ast_from_obj(a) for a in obj["args"]))
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "IfExpr":
        return IfExpr(
            branches=tuple(
                IfBranch(condition=ast_from_obj(b["condition"]), body=ast_from_obj(b["body"]))
                for b in obj["branches"]
            ),
            else_block=ast_from_obj(obj.get("else_block")),
        )
    if t == "ForLoop":
        return ForLoop(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))

    raise ValueError(f"Unknown AST node type: {t}")
