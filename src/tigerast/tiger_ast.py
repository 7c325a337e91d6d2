"""Tiger AST node model and the visitor dispatch contract.

Nodes are produced by the front end and a resolution stage, both external to
the traversals in this package. The traversals only read them: declaration and
loop back references (``Identifier.decl``, ``FunCall.decl``, ``Break.loop``)
are non-owning lookups and are never followed as children.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union

from tigerast.errors import InternalConsistencyError, SourceLocation


class Operator(Enum):
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    EQ = "="
    NEQ = "<>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_comparison(self) -> bool:
        return self not in (Operator.PLUS, Operator.MINUS, Operator.TIMES, Operator.DIVIDE)


class Type(Enum):
    INT = "int"
    STRING = "string"
    VOID = "void"
    UNDEF = "undef"  # not resolved yet


def type_display_name(t: Type) -> str:
    """Printable name of a resolved type; void and unresolved have none."""
    if t in (Type.INT, Type.STRING):
        return t.value
    raise InternalConsistencyError(
        message="attempting to print the type of t_void or t_undef",
        notes=[f"got {t.name}; types must be resolved before printing"],
    )


@dataclass(eq=False, slots=True)
class Node(ABC):
    loc: Optional[SourceLocation] = field(default=None, kw_only=True, repr=False)

    @property
    def kind(self) -> str:
        return type(self).__name__

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        ...


@dataclass(eq=False, slots=True)
class IntegerLiteral(Node):
    value: int

    def accept(self, visitor):
        return visitor.visit_IntegerLiteral(self)


@dataclass(eq=False, slots=True)
class StringLiteral(Node):
    value: str

    def accept(self, visitor):
        return visitor.visit_StringLiteral(self)


@dataclass(eq=False, slots=True)
class BinaryOperator(Node):
    op: Operator
    left: Node
    right: Node

    def accept(self, visitor):
        return visitor.visit_BinaryOperator(self)


@dataclass(eq=False, slots=True)
class Sequence(Node):
    exprs: List[Node] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_Sequence(self)


@dataclass(eq=False, slots=True)
class Let(Node):
    decls: List[Node]
    sequence: Sequence

    def accept(self, visitor):
        return visitor.visit_Let(self)


@dataclass(eq=False, slots=True)
class VarDecl(Node):
    name: str
    type_name: Optional[str] = None
    expr: Optional[Node] = None
    escapes: bool = False
    type: Type = Type.UNDEF
    depth: int = 0

    def accept(self, visitor):
        return visitor.visit_VarDecl(self)


@dataclass(eq=False, slots=True)
class FunDecl(Node):
    name: str
    params: List[VarDecl]
    body: Node
    type_name: Optional[str] = None
    external_name: Optional[str] = None  # defaults to name
    depth: int = 0

    def __post_init__(self):
        if self.external_name is None:
            self.external_name = self.name

    def accept(self, visitor):
        return visitor.visit_FunDecl(self)


@dataclass(eq=False, slots=True)
class Identifier(Node):
    name: str
    decl: Optional[VarDecl] = field(default=None, repr=False)
    depth: int = 0

    def accept(self, visitor):
        return visitor.visit_Identifier(self)


@dataclass(eq=False, slots=True)
class IfThenElse(Node):
    condition: Node
    then_part: Node
    else_part: Node

    def accept(self, visitor):
        return visitor.visit_IfThenElse(self)


@dataclass(eq=False, slots=True)
class FunCall(Node):
    func_name: str
    args: List[Node] = field(default_factory=list)
    decl: Optional[FunDecl] = field(default=None, repr=False)

    def accept(self, visitor):
        return visitor.visit_FunCall(self)


@dataclass(eq=False, slots=True)
class WhileLoop(Node):
    condition: Node
    body: Node

    def accept(self, visitor):
        return visitor.visit_WhileLoop(self)


@dataclass(eq=False, slots=True)
class ForLoop(Node):
    variable: VarDecl  # its initializer is the low bound
    high: Node
    body: Node

    def accept(self, visitor):
        return visitor.visit_ForLoop(self)


@dataclass(eq=False, slots=True)
class Break(Node):
    loop: Optional[Union[WhileLoop, ForLoop]] = field(default=None, repr=False)

    def accept(self, visitor):
        return visitor.visit_Break(self)


@dataclass(eq=False, slots=True)
class Assign(Node):
    lhs: Node
    rhs: Node

    def accept(self, visitor):
        return visitor.visit_Assign(self)


NODE_KINDS = (
    IntegerLiteral, StringLiteral, BinaryOperator, Sequence, Let, Identifier,
    IfThenElse, VarDecl, FunDecl, FunCall, WhileLoop, ForLoop, Break, Assign,
)


class ASTVisitor(ABC):
    """One handler per node kind.

    There is no generic fallback: a subclass missing any handler cannot be
    instantiated, and adding a node kind means adding an abstract method here.
    """

    @abstractmethod
    def visit_IntegerLiteral(self, node: IntegerLiteral): ...

    @abstractmethod
    def visit_StringLiteral(self, node: StringLiteral): ...

    @abstractmethod
    def visit_BinaryOperator(self, node: BinaryOperator): ...

    @abstractmethod
    def visit_Sequence(self, node: Sequence): ...

    @abstractmethod
    def visit_Let(self, node: Let): ...

    @abstractmethod
    def visit_Identifier(self, node: Identifier): ...

    @abstractmethod
    def visit_IfThenElse(self, node: IfThenElse): ...

    @abstractmethod
    def visit_VarDecl(self, node: VarDecl): ...

    @abstractmethod
    def visit_FunDecl(self, node: FunDecl): ...

    @abstractmethod
    def visit_FunCall(self, node: FunCall): ...

    @abstractmethod
    def visit_WhileLoop(self, node: WhileLoop): ...

    @abstractmethod
    def visit_ForLoop(self, node: ForLoop): ...

    @abstractmethod
    def visit_Break(self, node: Break): ...

    @abstractmethod
    def visit_Assign(self, node: Assign): ...
