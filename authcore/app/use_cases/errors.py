"""
Error codes returned by use cases.

Messages are deliberately generic: callers must not learn which check failed.
"""

from authcore.libs.result import Error

ABUSE_DETECTED = Error("ABUSE_DETECTED", "Maximum number of auth attempts reached.")
INVALID_CREDENTIALS = Error(
    "INVALID_CREDENTIALS", "Credentials are invalid or account is inactive."
)
INVALID_RESET = Error("INVALID_RESET", "Invalid email or key.")
INVALID_SESSION = Error("INVALID_SESSION", "Session is invalid.")
SESSION_NOT_FOUND = Error("SESSION_NOT_FOUND", "Session not found.")
USERNAME_TAKEN = Error("USERNAME_TAKEN", "Username already in use.")
EMAIL_TAKEN = Error("EMAIL_TAKEN", "Email already in use.")
ACCOUNT_CONFLICT = Error("ACCOUNT_CONFLICT", "Username or email already in use.")
STORE_UNAVAILABLE = Error(
    "STORE_UNAVAILABLE", "Service temporarily unavailable, retry later."
)
