import logging
from dataclasses import dataclass, field

import jwt
from fastapi import Request

from edusphere.application.exceptions.base import NotAuthenticatedError
from edusphere.application.identity import Identity, IdentityProvider
from edusphere.application.user_repo import UserRepository

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


@dataclass(slots=True)
class JwtIdentityProvider(IdentityProvider):
    """
    Identity from `Authorization: Bearer <JWT>`.

    The token subject is a user id; the user is read from the database on
    every request so role changes and deactivation apply immediately.
    """

    request: Request
    secret_key: str
    algorithm: str
    user_repository: UserRepository

    _identity: Identity | None = field(default=None, init=False)
    _resolved: bool = field(default=False, init=False)

    def _decode_subject(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise NotAuthenticatedError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise NotAuthenticatedError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise NotAuthenticatedError("Invalid token")
        return str(subject)

    async def find_identity(self) -> Identity | None:
        if self._resolved:
            return self._identity

        token = extract_bearer_token(self.request.headers.get("Authorization"))
        if token is None:
            self._resolved = True
            return None

        user_id = self._decode_subject(token)
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            logger.info("Token subject is not an active user: %s", user_id)
            raise NotAuthenticatedError("User no longer exists")

        self._identity = Identity(user_id=user_id, role=user.role)
        self._resolved = True
        return self._identity

    async def get_identity(self) -> Identity:
        identity = await self.find_identity()
        if identity is None:
            raise NotAuthenticatedError
        return identity
