"""Error kinds map to HTTP statuses through one exhaustive table."""

import pytest

from src.shared.core.exceptions import (
    STATUS_BY_KIND,
    AuthenticationError,
    CommentNotFoundError,
    ConflictError,
    CoordinateNotFoundError,
    ErrorKind,
    ForbiddenError,
    InvalidOperationError,
    ItemNotFoundError,
    NotFoundError,
    NotificationNotFoundError,
    SpeadwearException,
    UserNotFoundError,
    ValidationError,
)


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


@pytest.mark.parametrize(
    "exc, status",
    [
        (NotFoundError("not following"), 404),
        (UserNotFoundError(1), 404),
        (ItemNotFoundError(1), 404),
        (CoordinateNotFoundError(1), 404),
        (CommentNotFoundError(1), 404),
        (NotificationNotFoundError(1), 404),
        (ConflictError("already liked"), 400),
        (InvalidOperationError("cannot follow yourself"), 400),
        (ValidationError("bad"), 400),
        (ForbiddenError(), 403),
        (AuthenticationError(), 401),
        (SpeadwearException(), 500),
    ],
)
def test_status_follows_kind(exc, status):
    assert exc.status_code == status
    assert exc.error_code == exc.kind.value


def test_status_ignores_message_text():
    # A message that reads like another kind does not change the status
    assert ConflictError("user not found").status_code == 400
    assert NotFoundError("already following").status_code == 404


def test_explicit_kind_overrides_class_default():
    exc = SpeadwearException("nope", kind=ErrorKind.FORBIDDEN)
    assert exc.status_code == 403


def test_not_found_message_styles():
    assert UserNotFoundError(42).message == "User with id '42' not found"
    assert NotFoundError("not blocked").message == "not blocked"


def test_to_dict_envelope():
    exc = ValidationError("bad input", details={"field": "season"})
    assert exc.to_dict() == {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "bad input",
            "details": {"field": "season"},
        }
    }
