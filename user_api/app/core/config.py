"""
Configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can be started locally without any setup; in a deployment the
values are injected by the container runtime (``docker run --env-file``)
or the process supervisor.

Fields are resolved when an instance is created rather than when the
module is imported, so tests can adjust the environment and call
``get_settings`` again.
"""

import os
from dataclasses import dataclass, field
from typing import List, Tuple


DEFAULT_DATABASE_URL = "user_api.db"
DEFAULT_PORT = 3000
DEFAULT_ENVIRONMENT = "development"


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "User API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    # Deployment mode.  ``production`` switches logging to one JSON
    # object per line; any other value keeps human readable output.
    environment: str = field(default_factory=lambda: _env("ENVIRONMENT", DEFAULT_ENVIRONMENT))

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", str(DEFAULT_PORT))))

    # Path or connection string for the SQLite database.  Accepts a plain
    # file path, a ``sqlite:///`` URL or ``:memory:``.  Relative paths
    # are resolved against the project root by the ``db`` module.
    database_url: str = field(default_factory=lambda: _env("DATABASE_URL", DEFAULT_DATABASE_URL))

    # ``calendar`` or ``day_of_year``; see ``services.age.AgePolicy``.
    age_policy: str = field(default_factory=lambda: _env("AGE_POLICY", "calendar"))

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def defaulted(self) -> List[Tuple[str, str]]:
        """Return ``(variable, value)`` pairs that fell back to a default.

        Used at startup to report which of the connection settings were
        not supplied by the environment.  A value passed to the
        constructor is not a fallback even when the variable is unset.
        """
        fallbacks = []
        for name, value, default in (
            ("DATABASE_URL", self.database_url, DEFAULT_DATABASE_URL),
            ("PORT", self.port, DEFAULT_PORT),
            ("ENVIRONMENT", self.environment, DEFAULT_ENVIRONMENT),
        ):
            if not os.getenv(name) and value == default:
                fallbacks.append((name, str(value)))
        return fallbacks


def get_settings() -> Settings:
    """Read a fresh ``Settings`` instance from the current environment."""
    return Settings()
