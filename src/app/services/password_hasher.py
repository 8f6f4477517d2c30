from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing - application layer"""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def verify(self, plaintext: str, password_hash: str) -> bool:
        pass

    @abstractmethod
    def dummy_verify(self, plaintext: str) -> None:
        """Spend the same time as verify() when there is no stored hash to check."""
        pass
