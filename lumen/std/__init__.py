from typing import Any

from lumen.builtin_function import register_builtin, register_constant
from lumen.environment import Environment
from lumen.operators import to_integer, to_string
from lumen.types import IntegerVal, VOID, display


def populate_standard_environment(env: Environment) -> Environment:
        """Register the standard builtins and constants into `env`."""

        def std_int(call_env: Environment) -> Any:
            return to_integer(call_env.get('value'))

        def std_string(call_env: Environment) -> Any:
            return to_string(call_env.get('value'))

        def std_print(call_env: Environment) -> Any:
            print(display(call_env.get('value')))
            return VOID

        def std_length(call_env: Environment) -> Any:
            return IntegerVal(len(call_env.get('value').value))

        for type_name in ('string', 'int'):
            register_builtin(env, 'int', [('value', type_name)], std_int)
            register_builtin(env, 'string', [('value', type_name)], std_string)
        for type_name in ('int', 'string', 'fun', 'void'):
            register_builtin(env, 'print', [('value', type_name)], std_print)
        register_builtin(env, 'length', [('value', 'string')], std_length)

        register_constant(env, 'true', IntegerVal(1))
        register_constant(env, 'false', IntegerVal(0))
        return env
