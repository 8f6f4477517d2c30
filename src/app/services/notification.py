from abc import ABC, abstractmethod


class INotificationDispatcher(ABC):
    """Out-of-band delivery of credentials to users"""

    @abstractmethod
    async def send_password_reset_email(self, email: str, token: str) -> None:
        """Deliver a plaintext reset token. Implementations may raise; callers log."""
        pass
