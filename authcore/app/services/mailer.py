from abc import ABC, abstractmethod


class ResetKeyMailer(ABC):
    """Out-of-band delivery of password reset keys"""

    @abstractmethod
    async def send_password_reset(self, email: str, key: str) -> None:
        """Deliver the plaintext reset key to the account's email address"""
        pass
