"""Tests for secret resolution."""

from __future__ import annotations

import pytest

from buildenv.exceptions import BuildEnvError, MissingSecretError
from buildenv.models import SecretSource
from buildenv.secrets import (
    DEFAULT_SECRET,
    resolve_secret,
    resolve_secret_detailed,
    resolve_secrets,
)


class TestResolveSecret:
    def test_file_value_wins_over_environment(self, env_file, fake_env):
        path = env_file("GOOGLE_MAPS_API_KEY=abc\n")
        getenv = fake_env(GOOGLE_MAPS_API_KEY="from-env")
        assert resolve_secret(DEFAULT_SECRET, path, getenv) == "abc"

    def test_falls_back_to_environment(self, env_file, fake_env):
        path = env_file("OTHER=1\n")
        getenv = fake_env(GOOGLE_MAPS_API_KEY="xyz")
        assert resolve_secret(DEFAULT_SECRET, path, getenv) == "xyz"

    def test_missing_file_uses_environment(self, repo_root, fake_env):
        getenv = fake_env(GOOGLE_MAPS_API_KEY="xyz")
        assert resolve_secret(DEFAULT_SECRET, repo_root / ".env", getenv) == "xyz"

    def test_environment_value_trimmed(self, repo_root, fake_env):
        getenv = fake_env(GOOGLE_MAPS_API_KEY="  xyz \n")
        assert resolve_secret(DEFAULT_SECRET, repo_root / ".env", getenv) == "xyz"

    def test_neither_source_raises(self, repo_root, no_env):
        with pytest.raises(MissingSecretError) as exc_info:
            resolve_secret(DEFAULT_SECRET, repo_root / ".env", no_env)
        message = str(exc_info.value)
        assert "GOOGLE_MAPS_API_KEY" in message
        assert ".env" in message
        assert "environment variable" in message
        assert exc_info.value.names == ["GOOGLE_MAPS_API_KEY"]

    def test_missing_secret_is_build_env_error(self, repo_root, no_env):
        with pytest.raises(BuildEnvError):
            resolve_secret(DEFAULT_SECRET, repo_root / ".env", no_env)

    def test_blank_environment_value_raises(self, repo_root, fake_env):
        getenv = fake_env(GOOGLE_MAPS_API_KEY="   ")
        with pytest.raises(MissingSecretError):
            resolve_secret(DEFAULT_SECRET, repo_root / ".env", getenv)

    def test_empty_file_value_does_not_fall_back(self, env_file, fake_env):
        path = env_file("GOOGLE_MAPS_API_KEY=\n")
        getenv = fake_env(GOOGLE_MAPS_API_KEY="xyz")
        with pytest.raises(MissingSecretError):
            resolve_secret(DEFAULT_SECRET, path, getenv)

    def test_malformed_line_for_key_falls_back(self, env_file, fake_env):
        path = env_file("GOOGLE_MAPS_API_KEY\n=abc\n")
        getenv = fake_env(GOOGLE_MAPS_API_KEY="xyz")
        assert resolve_secret(DEFAULT_SECRET, path, getenv) == "xyz"

    def test_uses_process_environment_by_default(self, repo_root, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "real-env")
        assert resolve_secret(DEFAULT_SECRET, repo_root / ".env") == "real-env"

    def test_invalid_utf8_in_env_file(self, repo_root, no_env):
        path = repo_root / ".env"
        path.write_bytes(b"# caf\xe9 note\nGOOGLE_MAPS_API_KEY=abc\n")
        assert resolve_secret(DEFAULT_SECRET, path, no_env) == "abc"

    def test_other_names(self, env_file, no_env):
        path = env_file("SENTRY_DSN='https://key@example.com/1'\n")
        assert resolve_secret("SENTRY_DSN", path, no_env) == "https://key@example.com/1"


class TestResolveSecretDetailed:
    def test_reports_file_source(self, env_file, no_env):
        path = env_file("GOOGLE_MAPS_API_KEY=abc\n")
        secret = resolve_secret_detailed(DEFAULT_SECRET, path, no_env)
        assert secret.name == DEFAULT_SECRET
        assert secret.value == "abc"
        assert secret.source is SecretSource.FILE

    def test_reports_environment_source(self, repo_root, fake_env):
        getenv = fake_env(GOOGLE_MAPS_API_KEY="xyz")
        secret = resolve_secret_detailed(DEFAULT_SECRET, repo_root / ".env", getenv)
        assert secret.source is SecretSource.ENVIRONMENT


class TestResolveSecrets:
    def test_resolves_mixed_sources(self, env_file, fake_env):
        path = env_file("A=from-file\n")
        getenv = fake_env(B="from-env")
        assert resolve_secrets(["A", "B"], path, getenv) == {
            "A": "from-file",
            "B": "from-env",
        }

    def test_reports_all_missing_names(self, env_file, fake_env):
        path = env_file("A=1\n")
        getenv = fake_env(C="")
        with pytest.raises(MissingSecretError) as exc_info:
            resolve_secrets(["A", "B", "C"], path, getenv)
        assert exc_info.value.names == ["B", "C"]
        assert "B, C" in str(exc_info.value)

    def test_empty_names(self, repo_root, no_env):
        assert resolve_secrets([], repo_root / ".env", no_env) == {}


class TestMissingSecretError:
    def test_single_name_message(self):
        err = MissingSecretError("GOOGLE_MAPS_API_KEY")
        assert str(err) == (
            "Missing GOOGLE_MAPS_API_KEY. Add it to the repo root .env file "
            "(GOOGLE_MAPS_API_KEY=...) or set it as an environment variable."
        )

    def test_uses_env_file_name(self, tmp_path):
        err = MissingSecretError("KEY", tmp_path / ".env.local")
        assert ".env.local file" in str(err)
        assert err.env_file == tmp_path / ".env.local"
