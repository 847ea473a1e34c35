from typing import Any, Callable, List, Tuple

from lumen.environment import Environment
from lumen.types import BuiltinFunctionVal, mangle_declared, tag_for_type_name


def register_builtin(env: Environment, name: str, params: List[Tuple[str, str]],
                     fn: Callable[[Environment], Any]) -> BuiltinFunctionVal:
    """Install a Python callback as an overload of `name` in `env`.

    `params` lists ``(parameter name, declared type name)`` pairs, e.g.
    ``[('value', 'int')]``; the overload key is computed from the types
    exactly as for a user declaration.
    """
    typed = tuple((param_name, tag_for_type_name(type_name)) for param_name, type_name in params)
    func = BuiltinFunctionVal(mangle_declared(name, (tag for _, tag in typed)), typed, fn)
    env.declare(func.key, func)
    return func


def register_constant(env: Environment, name: str, value: Any):
    env.declare(name, value)
