"""Resolve required build secrets from the env file and the process environment.

The env file wins whenever it has the key at all. The environment is only
consulted for keys the file doesn't define. A value that is empty after
trimming aborts the build, whichever source it came from.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from buildenv.exceptions import MissingSecretError
from buildenv.models import ResolvedSecret, SecretSource
from buildenv.utils.env_parser import load_env_file

logger = logging.getLogger(__name__)

DEFAULT_SECRET = "GOOGLE_MAPS_API_KEY"

GetEnv = Callable[[str], str | None]


def _lookup(
    name: str, env: dict[str, str], getenv: GetEnv
) -> tuple[str, SecretSource | None]:
    if name in env:
        return env[name].strip(), SecretSource.FILE
    value = getenv(name)
    if value is None:
        return "", None
    return value.strip(), SecretSource.ENVIRONMENT


def resolve_secrets_detailed(
    names: Iterable[str],
    env_file: str | Path,
    getenv: GetEnv = os.environ.get,
) -> dict[str, ResolvedSecret]:
    """Resolve every name, raising one error that lists all missing names."""
    names = list(names)
    env = load_env_file(env_file)
    resolved: dict[str, ResolvedSecret] = {}
    missing: list[str] = []
    for name in names:
        value, source = _lookup(name, env, getenv)
        if not value:
            logger.debug("%s is missing or empty (source: %s)", name, source)
            missing.append(name)
            continue
        logger.debug("Resolved %s from %s", name, source.value)
        resolved[name] = ResolvedSecret(name=name, value=value, source=source)
    if missing:
        raise MissingSecretError(missing, env_file)
    return resolved


def resolve_secret_detailed(
    name: str,
    env_file: str | Path,
    getenv: GetEnv = os.environ.get,
) -> ResolvedSecret:
    return resolve_secrets_detailed([name], env_file, getenv)[name]


def resolve_secrets(
    names: Iterable[str],
    env_file: str | Path,
    getenv: GetEnv = os.environ.get,
) -> dict[str, str]:
    resolved = resolve_secrets_detailed(names, env_file, getenv)
    return {name: secret.value for name, secret in resolved.items()}


def resolve_secret(
    name: str,
    env_file: str | Path,
    getenv: GetEnv = os.environ.get,
) -> str:
    """Return the trimmed, non-empty value for ``name``.

    Raises MissingSecretError if neither source provides one.
    """
    return resolve_secret_detailed(name, env_file, getenv).value
