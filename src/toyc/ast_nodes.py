from dataclasses import dataclass, field
from typing import Any, Iterator, List

from toyc.my_types import TypeDesc


@dataclass
class Program:
    stmts: List[Any] = field(default_factory=list)
    line: int = 1
    def __repr__(self): return f"Program({self.stmts})"

@dataclass
class Block:
    stmts: List[Any] = field(default_factory=list)
    line: int = 0
    def __repr__(self): return f"Block({self.stmts})"

@dataclass
class VarDecl:
    name: str
    var_type: TypeDesc
    line: int = 0
    def __repr__(self): return f"VarDecl({self.name}, type={self.var_type})"

@dataclass
class Assign:
    target: Any  # Ident
    expr: Any
    line: int = 0
    def __repr__(self): return f"Assign({self.target} = {self.expr})"

@dataclass
class IfStmt:
    cond: Any
    body: Any  # Block or a single statement
    line: int = 0
    def __repr__(self): return f"If({self.cond}, {self.body})"

@dataclass
class WhileStmt:
    cond: Any
    body: Any  # Block or a single statement
    line: int = 0
    def __repr__(self): return f"While({self.cond}, {self.body})"

@dataclass
class RepeatStmt:
    body: Any  # Block
    cond: Any  # Condition
    line: int = 0
    def __repr__(self): return f"Repeat({self.body}, until={self.cond})"

@dataclass
class PrintStmt:
    expr: Any
    line: int = 0
    def __repr__(self): return f"Print({self.expr})"

@dataclass
class FactorialCall:
    arg: Any
    line: int = 0
    def __repr__(self): return f"Factorial({self.arg})"

# Expressions
@dataclass
class BinOp:
    op: str
    left: Any
    right: Any
    line: int = 0
    def __repr__(self): return f"BinOp({self.left} {self.op} {self.right})"

@dataclass
class Comparison:
    op: str
    left: Any
    right: Any
    line: int = 0
    def __repr__(self): return f"Comparison({self.left} {self.op} {self.right})"

@dataclass
class Condition:
    """Wraps a comparison so tests can be told apart from arithmetic."""
    expr: Any
    line: int = 0
    def __repr__(self): return f"Condition({self.expr})"

@dataclass
class NumberLiteral:
    value: str
    line: int = 0
    def __repr__(self): return f"Number({self.value})"

@dataclass
class StringLiteral:
    value: str
    line: int = 0
    def __repr__(self): return f"Str({self.value!r})"

@dataclass
class Ident:
    name: str
    line: int = 0
    def __repr__(self): return f"Ident({self.name})"


_CHILD_FIELDS = {
    'Program': ('stmts',),
    'Block': ('stmts',),
    'Assign': ('target', 'expr'),
    'IfStmt': ('cond', 'body'),
    'WhileStmt': ('cond', 'body'),
    'RepeatStmt': ('body', 'cond'),
    'PrintStmt': ('expr',),
    'FactorialCall': ('arg',),
    'BinOp': ('left', 'right'),
    'Comparison': ('left', 'right'),
    'Condition': ('expr',),
}


def children(node: Any) -> List[Any]:
    """Direct child nodes in source order."""
    result = []
    for name in _CHILD_FIELDS.get(node.__class__.__name__, ()):
        value = getattr(node, name)
        if isinstance(value, list):
            result.extend(value)
        elif value is not None:
            result.append(value)
    return result


def iter_nodes(root: Any) -> Iterator[Any]:
    """Pre-order walk yielding every node of the tree exactly once."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(children(node)))
