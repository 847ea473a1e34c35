from typing import Any, Dict, Optional

from lumen.errors import ResolutionError


class Environment:
    """A scope mapping identifiers (and overload keys) to runtime values.

    Each environment is created by one evaluation step (a block, a loop or
    a call) and links to the environment that was active at that point.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent is None:
            raise ResolutionError(f'could not find a value for {name!r}')
        value = self.parent.get(name)
        # cache the resolved cell locally; it is the same object, so later
        # in-place assignments stay visible through this entry
        self.values[name] = value
        return value

    def declare(self, name: str, value: Any):
        self.values[name] = value

    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth() + 1
