from dataclasses import dataclass
from typing import Dict, List, Optional

from toyc.my_types import TypeDesc


@dataclass
class Symbol:
    """A declared variable"""
    name: str
    type_: TypeDesc
    depth: int
    line: int
    initialized: bool = False


class ScopeManager:
    """Scope manager - a stack of per-block symbol maps"""

    def __init__(self):
        self.scopes: List[Dict[str, Symbol]] = []

    @property
    def depth(self) -> int:
        """Depth of the innermost scope; the program scope is 0."""
        return len(self.scopes) - 1

    def push(self):
        """Enter a new scope"""
        self.scopes.append({})

    def pop(self) -> Dict[str, Symbol]:
        """Leave the innermost scope, discarding everything declared in it"""
        return self.scopes.pop()

    def declare(self, name: str, t: TypeDesc, line: int) -> Symbol:
        if not self.scopes:
            self.push()
        symbol = Symbol(name, t, self.depth, line)
        self.scopes[-1][name] = symbol
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Innermost visible symbol named `name`"""
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def lookup_current(self, name: str) -> Optional[Symbol]:
        if not self.scopes:
            return None
        return self.scopes[-1].get(name)
