"""Custom exceptions for build environment resolution."""

from __future__ import annotations

from pathlib import Path


class BuildEnvError(Exception):
    """Base exception for errors that should abort the build."""


class MissingSecretError(BuildEnvError):
    """A required secret is absent or empty in both the env file and the environment."""

    def __init__(self, names: str | list[str], env_file: str | Path = ".env") -> None:
        if isinstance(names, str):
            names = [names]
        self.names = list(names)
        self.env_file = Path(env_file)
        super().__init__(self._format())

    def _format(self) -> str:
        missing = ", ".join(self.names)
        example = self.names[0]
        location = self.env_file.name or ".env"
        if len(self.names) == 1:
            pronoun, variables = "it", "an environment variable"
        else:
            pronoun, variables = "them", "environment variables"
        return (
            f"Missing {missing}. Add {pronoun} to the repo root {location} file "
            f"({example}=...) or set {pronoun} as {variables}."
        )
