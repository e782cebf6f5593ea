from dataclasses import dataclass, field

from passlib.context import CryptContext

from edusphere.application.password import PasswordHasher


@dataclass(slots=True)
class PasslibPasswordHasher(PasswordHasher):
    context: CryptContext = field(
        default_factory=lambda: CryptContext(schemes=["bcrypt"], deprecated="auto"),
    )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self.context.verify(password, password_hash)
