import os
from dataclasses import dataclass

from .errors import ConfigurationError
from .models import S3_MAX_OBJECT_BYTES

DEFAULT_URL_EXPIRATION = 300
# SigV4 presigned URLs cannot outlive seven days.
MAX_URL_EXPIRATION = 7 * 24 * 60 * 60
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    table_name: str
    bucket_name: str
    url_expiration: int = DEFAULT_URL_EXPIRATION
    max_file_size: int = S3_MAX_OBJECT_BYTES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ

        table = (env.get("DYNAMO_TABLE") or "").strip()
        bucket = (env.get("BUCKET_NAME") or "").strip()
        if not table:
            raise ConfigurationError("DYNAMO_TABLE is not set")
        if not bucket:
            raise ConfigurationError("BUCKET_NAME is not set")

        expiration = _int_env(env, "URL_EXPIRATION", DEFAULT_URL_EXPIRATION)
        if not 0 < expiration <= MAX_URL_EXPIRATION:
            raise ConfigurationError(
                f"URL_EXPIRATION must be between 1 and {MAX_URL_EXPIRATION} seconds"
            )

        log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        max_size = min(_int_env(env, "MAX_FILE_SIZE_BYTES", S3_MAX_OBJECT_BYTES), S3_MAX_OBJECT_BYTES)
        if max_size < 0:
            raise ConfigurationError("MAX_FILE_SIZE_BYTES must not be negative")

        return cls(
            table_name=table,
            bucket_name=bucket,
            url_expiration=expiration,
            max_file_size=max_size,
            log_level=log_level,
        )


def _int_env(env, name, default):
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
