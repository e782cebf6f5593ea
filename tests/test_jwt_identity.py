from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest

from edusphere.application.exceptions.base import NotAuthenticatedError
from edusphere.domain.user import Gender, User, UserRole
from edusphere.infrastructure.auth.jwt_identity import (
    JwtIdentityProvider,
    extract_bearer_token,
)

SECRET = "test-secret-key-with-enough-length"
USER_ID = "507f1f77bcf86cd799439013"


def make_token(subject=USER_ID, expires_in=timedelta(hours=1), secret=SECRET):
    payload = {"sub": subject, "exp": datetime.now(UTC) + expires_in}
    return jwt.encode(payload, secret, algorithm="HS256")


def make_provider(authorization=None, user=None):
    request = MagicMock()
    request.headers = {} if authorization is None else {"Authorization": authorization}
    user_repository = AsyncMock()
    user_repository.get_by_id.return_value = user
    return JwtIdentityProvider(
        request=request,
        secret_key=SECRET,
        algorithm="HS256",
        user_repository=user_repository,
    )


@pytest.fixture
def user():
    return User(
        name="Alice",
        username="alice",
        email="alice@example.com",
        password_hash="hash",
        phone_number="+15550001111",
        gender=Gender.FEMALE,
        role=UserRole.INSTRUCTOR,
        _id=USER_ID,
    )


@pytest.mark.parametrize(
    ("header", "token"),
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer ", None),
        ("Bearer abc.def", "abc.def"),
        ("bearer abc.def", "abc.def"),
    ],
)
def test_extract_bearer_token(header, token):
    assert extract_bearer_token(header) == token


@pytest.mark.asyncio
async def test_identity_from_valid_token(user):
    provider = make_provider(f"Bearer {make_token()}", user)

    identity = await provider.get_identity()

    assert identity.user_id == USER_ID
    assert identity.role is UserRole.INSTRUCTOR
    # resolved once per request
    await provider.find_identity()
    provider.user_repository.get_by_id.assert_awaited_once_with(USER_ID)


@pytest.mark.asyncio
async def test_anonymous_request():
    provider = make_provider()

    assert await provider.find_identity() is None
    with pytest.raises(NotAuthenticatedError):
        await provider.get_identity()


@pytest.mark.asyncio
async def test_expired_token(user):
    provider = make_provider(f"Bearer {make_token(expires_in=timedelta(hours=-1))}", user)

    with pytest.raises(NotAuthenticatedError) as exc_info:
        await provider.find_identity()

    assert exc_info.value.message == "Token has expired"


@pytest.mark.asyncio
async def test_token_signed_with_other_key(user):
    token = make_token(secret="another-secret-key-with-enough-length")
    provider = make_provider(f"Bearer {token}", user)

    with pytest.raises(NotAuthenticatedError) as exc_info:
        await provider.find_identity()

    assert exc_info.value.message == "Invalid token"


@pytest.mark.asyncio
async def test_deleted_user_is_not_authenticated():
    provider = make_provider(f"Bearer {make_token()}", user=None)

    with pytest.raises(NotAuthenticatedError) as exc_info:
        await provider.get_identity()

    assert exc_info.value.message == "User no longer exists"
