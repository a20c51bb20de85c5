"""bcrypt password hashing via passlib."""

from passlib.context import CryptContext

from core.config import settings


class PasswordHasher:
    """Salted one-way password hashing.

    passlib generates a fresh salt for every ``hash`` call and compares
    digests in constant time inside ``verify``.
    """

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bool(self._context.verify(plaintext, hashed))
        except (ValueError, TypeError):
            # Unrecognized or corrupt stored hash
            return False
