"""Tree-walking interpreter for the Lumen language.

`Interpreter.evaluate` maps each AST node class to a handler and evaluates
the node against an `Environment`, returning a runtime value. Scoping
follows these rules:

* every `Block` evaluation opens a fresh child environment and yields the
  value of its last expression;
* declarations bind in the environment they are evaluated in;
* a `for` loop opens one environment for the whole loop, so state carried
  across iterations lives there;
* a call's environment is parented to the *caller's* environment, so a
  function body sees whatever is in scope at the call site (dynamic
  scoping), not what was in scope where it was declared.

Functions are resolved through their overload key, the name followed by
the runtime type tags of the evaluated arguments (see `lumen.types`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .ast import (
    Block, BinaryOp, Call, ForLoop, FuncDecl, IfExpr, IntegerLiteral, Node,
    StringLiteral, UnaryOp, VarAccess, VarDecl,
)
from .environment import Environment
from .errors import ArityError, EmptyBlockError, LumenTypeError
from .operators import apply_binary, apply_unary, truthy
from .parser import parse_program
from .std import populate_standard_environment
from .types import (
    VOID, BuiltinFunctionVal, FunctionVal, IntegerVal, StringVal,
    display, mangle_call, mangle_declared, tag_for_type_name, type_name,
)


def bind_arguments(parent: Environment, func: Any, args: List[Any]) -> Environment:
    """Build a call environment binding each parameter to its argument.

    The argument count must equal the parameter count and every argument's
    runtime tag must equal the declared tag of its parameter.
    """
    if len(args) != len(func.params):
        raise ArityError(f"function {func.key} takes {len(func.params)} arguments, got {len(args)}")
    call_env = Environment(parent=parent)
    for index, ((name, tag), arg) in enumerate(zip(func.params, args)):
        if type_name(arg) != tag:
            raise LumenTypeError(
                f"function {func.key} expects argument {index} to be {tag}, got {type_name(arg)}")
        call_env.declare(name, arg)
    return call_env


class Interpreter:
    """Core interpreter that evaluates a Lumen AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.handlers: Dict[type, Callable[[Any, Environment], Any]] = {
            IntegerLiteral: self.eval_integer,
            StringLiteral: self.eval_string,
            Block: self.eval_block,
            VarDecl: self.eval_var_decl,
            VarAccess: self.eval_var_access,
            FuncDecl: self.eval_func_decl,
            Call: self.eval_call,
            BinaryOp: self.eval_binary,
            UnaryOp: self.eval_unary,
            IfExpr: self.eval_if,
            ForLoop: self.eval_for,
        }

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def new_global_env(self) -> Environment:
        """A fresh root environment with the standard library registered."""
        return populate_standard_environment(Environment())

    # Public API
    def run(self, program: Block, env: Optional[Environment] = None) -> Any:
        if env is None:
            env = self.new_global_env()
        if self.debug_level > 0 and self.debug_fp is None:
            self.debug_fp = open(self.debug_file, 'a')
        try:
            return self.evaluate(program, env)
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def evaluate(self, node: Node, env: Environment) -> Any:
        handler = self.handlers.get(type(node))
        if handler is None:
            raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")
        return handler(node, env)

    def eval_integer(self, node: IntegerLiteral, env: Environment) -> Any:
        return IntegerVal(node.value)

    def eval_string(self, node: StringLiteral, env: Environment) -> Any:
        return StringVal(node.value)

    def eval_block(self, node: Block, env: Environment) -> Any:
        if not node.expressions:
            raise EmptyBlockError('cannot evaluate an empty block')
        block_env = Environment(parent=env)
        for expr in node.expressions[:-1]:
            self.evaluate(expr, block_env)
        return self.evaluate(node.expressions[-1], block_env)

    def eval_var_decl(self, node: VarDecl, env: Environment) -> Any:
        value = self.evaluate(node.value, env)
        env.declare(node.name, value)
        if self.debug_level >= 2:
            self.debug(f"declare {node.name}: {type_name(value)} = {display(value)}")
        return VOID

    def eval_var_access(self, node: VarAccess, env: Environment) -> Any:
        return env.get(node.name)

    def eval_func_decl(self, node: FuncDecl, env: Environment) -> Any:
        params = tuple((param.name, tag_for_type_name(param.type_name)) for param in node.params)
        func = FunctionVal(mangle_declared(node.name, (tag for _, tag in params)), params, node.body)
        env.declare(func.key, func)
        if self.debug_level >= 2:
            self.debug(f"define function {func.key}")
        return VOID

    def eval_call(self, node: Call, env: Environment) -> Any:
        args = [self.evaluate(arg, env) for arg in node.args]
        key = mangle_call(node.name, args)
        func = env.get(key)
        if self.debug_level >= 1:
            self.debug(f"call {key} at depth {env.depth()}")
        return self.call_function(func, env, args)

    def call_function(self, func: Any, env: Environment, args: List[Any]) -> Any:
        if isinstance(func, BuiltinFunctionVal):
            return func.fn(bind_arguments(env, func, args))
        if isinstance(func, FunctionVal):
            return self.evaluate(func.body, bind_arguments(env, func, args))
        raise LumenTypeError(f"unsupported operation call on {type_name(func)}")

    def eval_binary(self, node: BinaryOp, env: Environment) -> Any:
        left = self.evaluate(node.left, env)
        right = self.evaluate(node.right, env)
        return apply_binary(node.op, left, right)

    def eval_unary(self, node: UnaryOp, env: Environment) -> Any:
        return apply_unary(node.op, self.evaluate(node.operand, env))

    def eval_if(self, node: IfExpr, env: Environment) -> Any:
        for branch in node.branches:
            cond = self.evaluate(branch.condition, env)
            taken = truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {display(cond)} -> {taken}")
            if taken:
                return self.evaluate(branch.body, env)
        if node.else_block is not None:
            return self.evaluate(node.else_block, env)
        return VOID

    def eval_for(self, node: ForLoop, env: Environment) -> Any:
        # one environment for the whole loop; condition and body blocks
        # each open their own child per evaluation
        loop_env = Environment(parent=env)
        while True:
            cond = self.evaluate(node.condition, loop_env)
            taken = truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"for condition {display(cond)} -> {taken}")
            if not taken:
                break
            self.evaluate(node.body, loop_env)
        return VOID


def run_program(source: str, debug_level: int = 0, source_name: str = '<input>') -> Any:
    """Convenience function to parse and run a Lumen program from source string."""
    program = parse_program(source, source_name)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program)


def run_file(file_path: str, debug_level: int = 0) -> Any:
    """Parse and run a Lumen source file."""
    path = Path(file_path)
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level, source_name=str(path))
