import json
import os

from pog import settings


def test_defaults_without_file(settings_home):
    cfg = settings.effective_settings(dotenv=False)
    assert cfg == settings.DEFAULTS


def test_set_and_reset(settings_home):
    settings.set_setting("digest", "sha512")
    settings.set_setting("salt_length", "12")
    sp = settings.settings_path()
    assert sp.exists()
    assert sp.parent.name == "pog"
    assert json.loads(sp.read_text(encoding="utf-8"))["digest"] == "sha512"

    cfg = settings.effective_settings(dotenv=False)
    assert cfg["digest"] == "sha512"
    assert cfg["salt_length"] == 12

    settings.reset_setting("digest")
    assert settings.get_setting("digest") is None
    assert settings.effective_settings(dotenv=False)["digest"] == "sha256"


def test_env_overrides_file(settings_home, monkeypatch):
    settings.set_setting("hash_format", "base64")
    monkeypatch.setenv("POG_HASH_FORMAT", "hex")
    monkeypatch.setenv("POG_PASSWORD_LENGTH", "16")
    cfg = settings.effective_settings(dotenv=False)
    assert cfg["hash_format"] == "hex"
    assert cfg["password_length"] == 16


def test_dotenv_file_is_read(settings_home):
    (settings_home / ".env").write_text("POG_STRENGTH_LEVEL=high\n", encoding="utf-8")
    assert settings.effective_settings()["strength_level"] == "high"
    assert "POG_STRENGTH_LEVEL" not in os.environ
    assert settings.effective_settings(dotenv=False)["strength_level"] == "medium_low"


def test_environment_wins_over_dotenv(settings_home, monkeypatch):
    (settings_home / ".env").write_text("POG_DIGEST=md5\nPOG_SALT_LENGTH=4\n", encoding="utf-8")
    monkeypatch.setenv("POG_DIGEST", "sha384")
    cfg = settings.effective_settings()
    assert cfg["digest"] == "sha384"
    assert cfg["salt_length"] == 4
    assert os.environ["POG_DIGEST"] == "sha384"
    assert "POG_SALT_LENGTH" not in os.environ


def test_corrupt_file_is_ignored(settings_home):
    settings.settings_path().write_text("{ not json", encoding="utf-8")
    assert settings.load_settings() == {}
    assert settings.effective_settings(dotenv=False)["digest"] == "sha256"


def test_bad_integer_falls_back(settings_home, monkeypatch):
    monkeypatch.setenv("POG_SALT_LENGTH", "lots")
    assert settings.effective_settings(dotenv=False)["salt_length"] == 8


def test_unknown_keys_are_not_merged(settings_home):
    settings.set_setting("workdir", "/tmp")
    assert "workdir" not in settings.effective_settings(dotenv=False)
