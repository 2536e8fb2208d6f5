"""Core error types shared across the archive API."""

from .errors import (
    PROBLEM_CONTENT_TYPE,
    ActionRefusedError,
    ConflictError,
    FieldFailure,
    GoneError,
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
    Problem,
    ProblemDetail,
    UnprocessableURLError,
    ValidationError,
)

__all__ = [
    "PROBLEM_CONTENT_TYPE",
    "Problem",
    "ProblemDetail",
    "FieldFailure",
    "ValidationError",
    "InvalidIdentifierError",
    "UnprocessableURLError",
    "NotFoundError",
    "ConflictError",
    "GoneError",
    "ActionRefusedError",
    "InternalError",
]
