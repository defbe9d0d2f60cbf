"""
Operation results and domain errors shared by the tournament workflows.

Workflows raise the exceptions below internally; the public operation functions
catch them, roll the session back and return an OperationResult so callers
always get a success/failure value for expected conditions. Store failures
(SQLAlchemy errors) are not caught here and propagate to the caller.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


class TournamentOperationError(Exception):
    """Base exception for expected workflow failures"""

    code = "operation_failed"


class PreconditionFailedError(TournamentOperationError):
    """The tournament is not in a state that allows the operation"""

    code = "precondition_failed"


class NotFoundError(TournamentOperationError):
    """A referenced zone, team or fixture does not exist"""

    code = "not_found"


class InvalidRequestError(TournamentOperationError):
    """The request is well-formed but its values are not acceptable"""

    code = "invalid_request"


@dataclass
class OperationResult:
    success: bool
    message: str
    code: str = "ok"
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **data: Any) -> "OperationResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failed(cls, error: TournamentOperationError, **data: Any) -> "OperationResult":
        return cls(success=False, message=str(error), code=error.code, data=data)
