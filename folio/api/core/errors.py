"""Problem details for archive operations.

Every failure surfaced by the services is a ``Problem``: an exception that
knows its HTTP status and renders as an RFC 9457 ``application/problem+json``
document. Subclasses map to the error taxonomy used by the handlers:

- ValidationError: a field broke a length or format rule (422)
- InvalidIdentifierError: malformed UUID (422)
- UnprocessableURLError: URL is not an absolute request URI (422)
- NotFoundError: record does not exist (404)
- ConflictError: duplicate record or association (409)
- GoneError: shareable link expired or orphaned (410)
- ActionRefusedError: transition not allowed in the current state (400)
- InternalError: unexpected failure not caused by the caller (500)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from folio.api.constants import ABOUT_BLANK

PROBLEM_CONTENT_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """RFC 9457 problem document."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(default=ABOUT_BLANK, description="Problem type URI")
    status: int = Field(..., ge=100, le=599, description="HTTP status code")
    title: str = Field(..., description="Short human-readable summary")
    detail: str | None = Field(default=None, description="Occurrence-specific explanation")
    instance: str | None = Field(default=None, description="URI of the failing request")


class FieldFailure(BaseModel):
    """A single violated field rule."""

    field: str
    criterion: str
    parameter: str | None = None


class Problem(Exception):
    """Base class for archive errors that render as problem details."""

    status: int = 500
    title: str = "Internal Server Error."

    def __init__(
        self,
        detail: str | None = None,
        *,
        title: str | None = None,
        status: int | None = None,
        type: str = ABOUT_BLANK,
        **extensions: Any,
    ) -> None:
        super().__init__(detail or title or self.title)
        self.detail = detail
        if title is not None:
            self.title = title
        if status is not None:
            self.status = status
        self.type = type
        self.extensions: dict[str, Any] = extensions

    def to_detail(self, instance: str | None = None) -> ProblemDetail:
        """Render this problem as a serializable document."""
        return ProblemDetail(
            type=self.type,
            status=self.status,
            title=self.title,
            detail=self.detail,
            instance=instance,
            **self.extensions,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self.status}, title={self.title!r}, "
            f"detail={self.detail!r}, extensions={self.extensions!r})"
        )


class ValidationError(Problem):
    """A field failed a validation rule such as ``max 256``."""

    status = 422
    title = "Failed to validate request data."

    def __init__(self, field: str, criterion: str, parameter: str | int | None = None) -> None:
        failure = FieldFailure(
            field=field,
            criterion=criterion,
            parameter=None if parameter is None else str(parameter),
        )
        super().__init__(
            "The provided data does not meet the required validation criteria. "
            "Please review your input and try again.",
            errors=[failure.model_dump(exclude_none=True)],
        )
        self.field = failure.field
        self.criterion = failure.criterion
        self.parameter = failure.parameter


class InvalidIdentifierError(Problem):
    """The value could not be parsed as a UUID."""

    status = 422
    title = "Could not parse UUID."

    def __init__(self, value: str) -> None:
        super().__init__(
            f"The provided value '{value}' is not a valid UUID.",
            wrong_uuid=value,
        )
        self.value = value


class UnprocessableURLError(Problem):
    """The value is not an absolute request URI."""

    status = 422
    title = "Unprocessable URL format."

    def __init__(self, value: str) -> None:
        super().__init__(
            f"There was an error parsing the requested URL: '{value}'.",
            wrong_url=value,
        )
        self.value = value


class NotFoundError(Problem):
    """The requested record does not exist."""

    status = 404
    title = "Record not found."

    def __init__(self, record_id: str, record_type: str) -> None:
        super().__init__(
            f"The {record_type} record with ID '{record_id}' could not be found in the database.",
            record_id=record_id,
            record_type=record_type,
        )
        self.record_id = record_id
        self.record_type = record_type


class ConflictError(Problem):
    """The record or association already exists."""

    status = 409
    title = "Conflict."


class GoneError(Problem):
    """The resource existed once but is no longer reachable."""

    status = 410
    title = "Gone."


class ActionRefusedError(Problem):
    """The operation is not allowed in the record's current state."""

    status = 400
    title = "Action refused."


class InternalError(Problem):
    """Unexpected failure not attributable to the caller."""

    status = 500
    title = "Internal Server Error."

    def __init__(self, detail: str | None = None, **extensions: Any) -> None:
        super().__init__(
            detail
            or "An unexpected error occurred while processing your request. "
            "Please try again later.",
            **extensions,
        )
