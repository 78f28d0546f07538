## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from collections import ChainMap

from .types import Value


class Environment:
    """Lexical scope mapping names to values, chained to the scope it was opened from.

    A binding holds `None` when the variable was declared without an initializer.  Lookups
    go from the innermost scope outward; a name missing from every scope raises `KeyError`.
    """

    def __init__(self, enclosing: "Environment | None" = None):
        self.enclosing = enclosing
        self.bindings: ChainMap[str, Value | None] = ChainMap() if enclosing is None else enclosing.bindings.new_child()

    def child(self) -> "Environment":
        """Open a nested scope whose bindings are discarded along with it."""
        return Environment(self)

    def declare(self, name: str, value: Value | None = None) -> None:
        # Writes only ever land in the innermost scope, shadowing anything outside.
        self.bindings[name] = value

    def get(self, name: str) -> Value | None:
        return self.bindings[name]

    def set(self, name: str, value: Value) -> None:
        for scope in self.bindings.maps:
            if name in scope:
                scope[name] = value
                return
        raise KeyError(name)

    def __contains__(self, name: str) -> bool:
        return name in self.bindings

    def __repr__(self):
        return f"<Environment depth={len(self.bindings.maps)} {dict(self.bindings)!r}>"
