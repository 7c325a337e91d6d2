from dataclasses import dataclass, field
from typing import List, Optional, Any


@dataclass(frozen=True)
class SourceLocation:
    """Location in source code"""
    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(eq=False)
class TigerError(Exception):
    """Failure surfaced to the caller of a traversal or of the front end"""
    message: str
    error_type: str = "TigerError"  # e.g. "SyntaxError", "EvaluationError"
    location: Optional[SourceLocation] = None
    node: Optional[Any] = None  # AST node if available
    notes: List[str] = field(default_factory=list)  # Additional notes/hints

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = []

        loc = str(self.location) if self.location else "unknown location"
        parts.append(f"{self.error_type} at {loc}: {self.message}")

        if self.notes:
            parts.append("\nNotes:")
            parts.extend(f"  - {note}" for note in self.notes)

        return "\n".join(parts)


@dataclass(eq=False)
class InternalConsistencyError(TigerError):
    """An upstream invariant was violated (e.g. types printed before resolution)"""
    error_type: str = "InternalError"


@dataclass(eq=False)
class NestingTooDeepError(TigerError):
    """The tree is nested deeper than the configured traversal limit"""
    error_type: str = "NestingError"


@dataclass(eq=False)
class EvaluationError(TigerError):
    error_type: str = "EvaluationError"


@dataclass(eq=False)
class UnsupportedNodeError(EvaluationError):
    """The evaluator met a node kind outside its supported subset"""
    kind: str = ""


@dataclass(eq=False)
class StackUnderflowError(EvaluationError):
    required: int = 0
    available: int = 0


@dataclass(eq=False)
class DivisionByZeroError(EvaluationError):
    pass


@dataclass(eq=False)
class TigerSyntaxError(TigerError):
    error_type: str = "SyntaxError"


def node_location(node: Any) -> Optional[SourceLocation]:
    return getattr(node, "loc", None)
