import logging

from authcore.app.services.mailer import ResetKeyMailer

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    local, _, domain = email.partition("@")
    if not domain:
        return "***"
    return f"{local[:1]}***@{domain}"


class LoggingResetMailer(ResetKeyMailer):
    """
    Development mailer: records that a reset email would be sent.

    The key itself is never written to the log. Production deployments
    provide a real delivery adapter through the get_reset_mailer dependency.
    """

    def __init__(self, project_name: str):
        self.project_name = project_name

    async def send_password_reset(self, email: str, key: str) -> None:
        logger.info(
            f"[{self.project_name}] password reset email queued for {redact_email(email)}"
        )
