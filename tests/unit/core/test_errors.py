"""Tests for problem details."""

from folio.api.constants import ABOUT_BLANK
from folio.api.core.errors import (
    ActionRefusedError,
    ConflictError,
    GoneError,
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
    Problem,
    ValidationError,
)


class TestProblem:
    """Tests for the Problem base class."""

    def test_defaults(self) -> None:
        problem = Problem()
        assert problem.status == 500
        assert problem.type == ABOUT_BLANK
        assert problem.extensions == {}

    def test_overrides_do_not_leak_to_class(self) -> None:
        """Per-instance title and status leave the class defaults untouched."""
        problem = ConflictError("Duplicate tag.", title="Tag exists.", status=418)
        assert problem.title == "Tag exists."
        assert problem.status == 418
        assert ConflictError.title == "Conflict."
        assert ConflictError.status == 409

    def test_to_detail_includes_extensions(self) -> None:
        problem = GoneError("Broken shareable link.", shareable_link=ABOUT_BLANK)
        body = problem.to_detail(instance="/archive/s/abc").model_dump(exclude_none=True)
        assert body == {
            "type": ABOUT_BLANK,
            "status": 410,
            "title": "Gone.",
            "detail": "Broken shareable link.",
            "instance": "/archive/s/abc",
            "shareable_link": ABOUT_BLANK,
        }

    def test_extensions_added_after_raise_are_rendered(self) -> None:
        problem = ActionRefusedError("Cannot publish.")
        problem.extensions["shareable_link"] = ABOUT_BLANK
        assert problem.to_detail().model_dump()["shareable_link"] == ABOUT_BLANK


class TestTaxonomy:
    """Tests for the concrete problem types."""

    def test_validation_error(self) -> None:
        error = ValidationError("title", "max", 256)
        assert error.status == 422
        assert error.parameter == "256"
        assert error.extensions["errors"] == [{"field": "title", "criterion": "max", "parameter": "256"}]

    def test_validation_error_without_parameter(self) -> None:
        error = ValidationError("title", "required")
        assert error.extensions["errors"] == [{"field": "title", "criterion": "required"}]

    def test_invalid_identifier(self) -> None:
        error = InvalidIdentifierError("nope")
        assert error.status == 422
        assert error.extensions == {"wrong_uuid": "nope"}

    def test_not_found(self) -> None:
        error = NotFoundError("abc", "draft")
        assert error.status == 404
        assert error.title == "Record not found."
        assert error.extensions == {"record_id": "abc", "record_type": "draft"}
        assert "draft" in error.detail

    def test_internal_error_default_detail(self) -> None:
        error = InternalError()
        assert error.status == 500
        assert error.detail.startswith("An unexpected error occurred")

    def test_all_problems_are_exceptions(self) -> None:
        for error in (ConflictError(), GoneError(), ActionRefusedError(), InternalError()):
            assert isinstance(error, Problem)
            assert isinstance(error, Exception)
