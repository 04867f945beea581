from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TypeDesc:
    """
    Type descriptor:
    - kind: 'numeric', 'string'
    - name: declared spelling ('int'/'char'/'float'/'string'), or None for
      values that are only known to be numeric (literals, arithmetic)
    """
    kind: str
    name: Optional[str] = None

    def __repr__(self):
        if self.name:
            return self.name
        return self.kind

    def is_numeric(self) -> bool:
        return self.kind == 'numeric'

    def is_string(self) -> bool:
        return self.kind == 'string'

    def compatible_with(self, other: 'TypeDesc', op: Optional[str] = None) -> bool:
        """Check the two-class rule; `op` is the operator joining the values, if any."""
        if other is None:
            return False
        if self.is_numeric() and other.is_numeric():
            return True
        if self.is_string() and other.is_string():
            return op is None or op == '+'
        return False


# Declared variable types
INT = TypeDesc('numeric', 'int')
CHAR = TypeDesc('numeric', 'char')
FLOAT = TypeDesc('numeric', 'float')
STRING = TypeDesc('string', 'string')

# Number literals and arithmetic results
NUMERIC = TypeDesc('numeric')

DECLARED_TYPES = {
    'int': INT,
    'char': CHAR,
    'float': FLOAT,
    'string': STRING,
}


def type_from_name(name: str) -> TypeDesc:
    return DECLARED_TYPES[name]
