"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DB_PATH = "myworkboard.db"
DEFAULT_KEYRING_SERVICE = "myworkboard"
DEFAULT_TARGET_END_FIELD = "customfield_14221"  # "Target End" date on initiatives
DEFAULT_MAX_RESULTS = 500
DEFAULT_HTTP_TIMEOUT = 30.0

ENV_PREFIX = "MYWORKBOARD_"


@dataclass(frozen=True)
class Settings:
    """Service settings.

    Attributes:
        db_path: SQLite file holding the encrypted credential blob.
        keyring_service: OS keyring service name that owns the encryption key.
        target_end_field: Tracker custom field carrying an initiative's target end date.
        max_results: Result cap applied to each search phase.
        http_timeout: Transport timeout for tracker requests, in seconds.
        allowed_origins: Browser origins allowed to call the API cross-origin.
            Empty means no CORS headers are sent at all.
        log_dir: Directory for the rotating log file. None defers to
            MYWORKBOARD_LOG_DIR, then 'logs'.
    """

    db_path: str = DEFAULT_DB_PATH
    keyring_service: str = DEFAULT_KEYRING_SERVICE
    target_end_field: str = DEFAULT_TARGET_END_FIELD
    max_results: int = DEFAULT_MAX_RESULTS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    allowed_origins: tuple[str, ...] = ()
    log_dir: str | None = None

    def __post_init__(self) -> None:
        if self.max_results <= 0:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive, got {self.http_timeout}")
        # GET /credential returns the plaintext secret.
        if "*" in self.allowed_origins:
            raise ValueError("allowed_origins must list explicit origins, not '*'")

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from MYWORKBOARD_* environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed or is not positive,
                or MYWORKBOARD_ALLOWED_ORIGINS contains '*'.
        """
        return cls(
            db_path=os.environ.get(f"{ENV_PREFIX}DB_PATH", DEFAULT_DB_PATH),
            keyring_service=os.environ.get(f"{ENV_PREFIX}KEYRING_SERVICE", DEFAULT_KEYRING_SERVICE),
            target_end_field=os.environ.get(
                f"{ENV_PREFIX}TARGET_END_FIELD", DEFAULT_TARGET_END_FIELD
            ),
            max_results=_env_number(f"{ENV_PREFIX}MAX_RESULTS", DEFAULT_MAX_RESULTS, int),
            http_timeout=_env_number(f"{ENV_PREFIX}HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
            allowed_origins=_env_list(f"{ENV_PREFIX}ALLOWED_ORIGINS"),
            log_dir=os.environ.get(f"{ENV_PREFIX}LOG_DIR") or None,
        )


def _env_number(name: str, default: int | float, cast: type) -> int | float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())  # type: ignore[no-any-return]
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.environ.get(name, "")
    return tuple(item.strip().rstrip("/") for item in raw.split(",") if item.strip())
