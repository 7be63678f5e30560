"""Application-wide configuration loader.

All values are read from environment variables once, when this module is
imported, and exposed through the module-level ``settings`` singleton.  Tests
that need different values set the environment and ``reload`` this module.
"""

import os


def _float_env(key: str, default: str) -> float:
    return float(os.getenv(key) or default)


class Settings:
    """Settings helper that gracefully falls back to sane defaults.

    Rationale
    ---------
    When a deployment injects an environment variable whose value is empty
    (e.g. ``ASSEMBLYAI_BASE_URL=""``) ``os.getenv("ASSEMBLYAI_BASE_URL", default)``
    returns an empty string *not* ``None`` and the useful default is lost.  We
    therefore use the idiom

        os.getenv(KEY) or DEFAULT

    so that *falsy* values ("", None) are replaced by the specified DEFAULT.
    """

    # Remote transcription service
    ASSEMBLYAI_API_KEY: str = os.getenv('ASSEMBLYAI_API_KEY') or ''
    ASSEMBLYAI_BASE_URL: str = os.getenv('ASSEMBLYAI_BASE_URL') or 'https://api.assemblyai.com/v2'
    ASSEMBLYAI_WEBHOOK_URL: str | None = os.getenv('ASSEMBLYAI_WEBHOOK_URL') or None
    HTTP_TIMEOUT_SECONDS: float = _float_env('HTTP_TIMEOUT_SECONDS', '60')

    # Long-polling (library / CLI only, the browser polls on its own)
    POLL_INTERVAL_SECONDS: float = _float_env('POLL_INTERVAL_SECONDS', '3')
    POLL_TIMEOUT_SECONDS: float = _float_env('POLL_TIMEOUT_SECONDS', '1800')

    # Browser-side polling of GET /transcript/{id}
    TRANSCRIPT_REFRESH_SECONDS: int = int(os.getenv('TRANSCRIPT_REFRESH_SECONDS') or '3')

    # Logging
    LOG_DIR: str = os.getenv('LOG_DIR', 'logs')
    LOG_LEVEL: str = (os.getenv('LOG_LEVEL') or 'INFO').upper()

    @property
    def poll_timeout(self) -> float | None:
        """``POLL_TIMEOUT_SECONDS`` with ``0`` meaning "wait forever"."""
        return self.POLL_TIMEOUT_SECONDS or None


settings = Settings()
