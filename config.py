import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    PROJECT_NAME = data.get("PROJECT_NAME", "Authcore")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./authcore.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Credential hashing (bcrypt work factor)
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Brute-force detection over failed login attempts
    ABUSE_WINDOW_SECONDS = int(data.get("ABUSE_WINDOW_SECONDS", 3600))
    ABUSE_MAX_FOR_IP = int(data.get("ABUSE_MAX_FOR_IP", 50))
    ABUSE_MAX_FOR_USERNAME = int(data.get("ABUSE_MAX_FOR_USERNAME", 7))
    ABUSE_MAX_FOR_IP_AND_USERNAME = int(data.get("ABUSE_MAX_FOR_IP_AND_USERNAME", 10))

    # Password reset tokens
    RESET_TOKEN_TTL_SECONDS = int(data.get("RESET_TOKEN_TTL_SECONDS", 10000))

    # Hint sent with 503 responses when the store cannot be reached
    STORE_RETRY_AFTER_SECONDS = int(data.get("STORE_RETRY_AFTER_SECONDS", 5))
