import bcrypt

from src.app.services.password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt implementation of the password hasher (cost factor 12 by default)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = None

    def hash(self, plaintext: str) -> str:
        password_hash = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return password_hash.decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash or a password beyond bcrypt's 72-byte limit
            return False

    def dummy_verify(self, plaintext: str) -> None:
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy_password")
        self.verify(plaintext, self._dummy_hash)
