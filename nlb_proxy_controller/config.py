"""
Controller configuration read from the environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_NAMESPACE = "default"
DEFAULT_RECONCILE_INTERVAL = 10  # seconds between reconciliation passes
DEFAULT_RECONCILE_WORKERS = 1
DEFAULT_WATCH_TIMEOUT = 300  # seconds per watch stream before reconnecting
DEFAULT_AWS_MAX_ATTEMPTS = 3
DEFAULT_STATUS_PORT = 8080


class ConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""


def _int_from_env(environ: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class ControllerConfig:
    namespace: str = DEFAULT_NAMESPACE
    reconcile_interval: int = DEFAULT_RECONCILE_INTERVAL
    reconcile_workers: int = DEFAULT_RECONCILE_WORKERS
    watch_timeout: int = DEFAULT_WATCH_TIMEOUT
    aws_region: Optional[str] = None
    aws_max_attempts: int = DEFAULT_AWS_MAX_ATTEMPTS
    status_port: int = DEFAULT_STATUS_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ControllerConfig":
        """
        Build the configuration from environment variables.

        Raises:
            ConfigError: If a numeric variable is malformed or out of range
        """
        if environ is None:
            environ = os.environ
        return cls(
            namespace=environ.get('NAMESPACE') or DEFAULT_NAMESPACE,
            reconcile_interval=_int_from_env(environ, 'RECONCILE_INTERVAL', DEFAULT_RECONCILE_INTERVAL, 1),
            reconcile_workers=_int_from_env(environ, 'RECONCILE_WORKERS', DEFAULT_RECONCILE_WORKERS, 1),
            watch_timeout=_int_from_env(environ, 'WATCH_TIMEOUT', DEFAULT_WATCH_TIMEOUT, 1),
            aws_region=environ.get('AWS_REGION') or environ.get('AWS_DEFAULT_REGION') or None,
            aws_max_attempts=_int_from_env(environ, 'AWS_MAX_ATTEMPTS', DEFAULT_AWS_MAX_ATTEMPTS, 1),
            status_port=_int_from_env(environ, 'STATUS_PORT', DEFAULT_STATUS_PORT, 0),
        )
