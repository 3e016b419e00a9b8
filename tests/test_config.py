from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import REQUEST_TIMEOUT_SECONDS, AppSettings, write_user_env_vars


def test_defaults(monkeypatch):
    monkeypatch.delenv("MEDSHELF_BASE_URL", raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "https://simplytest-api.onrender.com"
    assert settings.request_timeout_seconds == REQUEST_TIMEOUT_SECONDS == 90.0
    assert settings.origin is None
    assert settings.effective_log_level == "WARNING"


def test_env_prefix_is_read(monkeypatch):
    monkeypatch.setenv("MEDSHELF_BASE_URL", "http://localhost:8080")
    monkeypatch.setenv("MEDSHELF_DEBUG", "true")
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "http://localhost:8080"
    assert settings.effective_log_level == "DEBUG"


def test_env_file_is_read(tmp_path, monkeypatch):
    monkeypatch.delenv("MEDSHELF_ORIGIN", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("MEDSHELF_ORIGIN=https://app.example\n", encoding="utf-8")
    assert AppSettings(_env_file=env_file).origin == "https://app.example"


@pytest.mark.parametrize("field,value", [("request_timeout_seconds", 0), ("log_format", "xml")])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, **{field: value})


def test_write_user_env_vars_merges_and_sorts(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"MEDSHELF_BASE_URL": "http://a"}, env_path=env_path)
    write_user_env_vars({"MEDSHELF_ORIGIN": "https://o", "MEDSHELF_DEBUG": None}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "# medshelf user config (.env)",
        "MEDSHELF_BASE_URL=http://a",
        "MEDSHELF_ORIGIN=https://o",
    ]
