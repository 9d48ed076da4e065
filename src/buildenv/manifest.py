"""Manifest placeholders handed to the Android build.

The Gradle side reads the rendered file as Java properties and copies each
entry into ``manifestPlaceholders``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from buildenv.exceptions import BuildEnvError

logger = logging.getLogger(__name__)

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
}


# Properties.load(InputStream) decodes ISO-8859-1, so everything outside
# printable ASCII goes out as UTF-16 \uXXXX units.
def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if " " <= ch <= "~":
        return ch
    data = ch.encode("utf-16-be", "surrogatepass")
    return "".join(
        f"\\u{int.from_bytes(data[i:i + 2], 'big'):04x}" for i in range(0, len(data), 2)
    )


def _escape(text: str, *, key: bool = False) -> str:
    out = []
    for i, ch in enumerate(text):
        if ch == " " and (key or i == 0):
            out.append("\\ ")
        elif key and ch in "#!":
            out.append("\\" + ch)
        else:
            out.append(_escape_char(ch))
    return "".join(out)


class ManifestPlaceholders:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    @classmethod
    def from_secrets(cls, secrets: Mapping[str, str]) -> ManifestPlaceholders:
        placeholders = cls()
        for name, value in secrets.items():
            placeholders.inject(name, value)
        return placeholders

    def inject(self, name: str, value: str) -> None:
        if not name.strip():
            raise BuildEnvError("Placeholder name must not be empty")
        if not value.strip():
            raise BuildEnvError(f"Refusing to inject empty value for {name}")
        self._values[name.strip()] = value

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def render(self) -> str:
        """Render as Java properties text, one placeholder per line."""
        lines = ["# Generated by buildenv. Do not commit."]
        for name, value in self._values.items():
            lines.append(f"{_escape(name, key=True)}={_escape(value)}")
        return "\n".join(lines) + "\n"

    def write(self, path: str | Path) -> Path:
        """Write the rendered placeholders, readable only by the owner."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="ascii") as f:
            os.chmod(path, 0o600)
            f.write(self.render())
        logger.debug("Wrote %d placeholders to %s", len(self), path)
        return path
