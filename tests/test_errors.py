from fastapi import HTTPException

from app.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError


def test_errors_are_http_exceptions_with_fixed_status():
    missing = NotFoundError('Video not found')
    assert isinstance(missing, HTTPException)
    assert missing.status_code == 404
    assert missing.detail == 'Video not found'
    assert ConflictError().status_code == 409
    assert ConflictError().detail == 'Conflict'
    assert ValidationError('Video required').status_code == 400


def test_unauthorized_carries_bearer_challenge():
    error = UnauthorizedError('Invalid token')
    assert error.status_code == 401
    assert error.headers == {'WWW-Authenticate': 'Bearer'}
