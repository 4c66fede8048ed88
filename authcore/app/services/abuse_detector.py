"""
Abuse Detector

Brute-force protection over the persisted history of failed logins.
"""

import logging

from authcore.app.repositories.auth_attempt_repository import IAuthAttemptRepository
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.base import utcnow
from authcore.domain.entities import AuthAttempt

logger = logging.getLogger(__name__)


class AbuseDetector:
    """
    Decides whether an (ip, username) pair has used up its retry budget.

    Policy is a pure function of the failures inside the trailing window:
    - failures from the ip, any username
    - failures for the username, any ip
    - failures for the exact (ip, username) pair
    Any count at or above its threshold means abusive. The first catches one
    client spraying usernames, the second a distributed attack on one account.

    Store errors propagate as StoreUnavailableError; an unreadable history is
    never treated as clean.
    """

    def __init__(self, attempts: IAuthAttemptRepository, settings: AuthSettings):
        self.attempts = attempts
        self.settings = settings

    async def record_failure(self, ip: str, username: str) -> AuthAttempt:
        attempt = await self.attempts.create(AuthAttempt(ip=ip, username=username))
        logger.info(f"Failed login recorded for username={username!r} ip={ip}")
        return attempt

    async def is_abusive(self, ip: str, username: str) -> bool:
        since = utcnow() - self.settings.abuse_window

        for_ip = await self.attempts.count_since(since, ip=ip)
        if for_ip >= self.settings.abuse_max_for_ip:
            logger.warning(f"Abuse detected: {for_ip} failures from ip={ip}")
            return True

        for_username = await self.attempts.count_since(since, username=username)
        if for_username >= self.settings.abuse_max_for_username:
            logger.warning(
                f"Abuse detected: {for_username} failures for username={username!r}"
            )
            return True

        for_pair = await self.attempts.count_since(since, ip=ip, username=username)
        if for_pair >= self.settings.abuse_max_for_ip_and_username:
            logger.warning(
                f"Abuse detected: {for_pair} failures for username={username!r} ip={ip}"
            )
            return True

        return False
