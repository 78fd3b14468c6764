import pytest
from pydantic import ValidationError

from quickapi import CredentialPlacement
from quickapi.core.config import AppSettings, get_user_env_file, write_user_env_vars


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings(_env_file=None)
        assert settings.base_url is None
        assert settings.api_key is None
        assert settings.api_key_name == "X-API-Key"
        assert settings.api_place is CredentialPlacement.HEADER
        assert settings.http_timeout_seconds == 20.0
        assert settings.follow_redirects is True

    def test_reads_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("QUICKAPI_BASE_URL", "https://api.example.com")
        monkeypatch.setenv("QUICKAPI_API_PLACE", "query_param")
        monkeypatch.setenv("QUICKAPI_HTTP_TIMEOUT_SECONDS", "5")

        settings = AppSettings(_env_file=None)

        assert settings.base_url == "https://api.example.com"
        assert settings.api_place is CredentialPlacement.QUERY_PARAM
        assert settings.http_timeout_seconds == 5.0

    def test_reads_project_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("QUICKAPI_API_KEY=from-file\n", encoding="utf-8")

        settings = AppSettings(_env_file=env_file)

        assert settings.api_key == "from-file"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, http_timeout_seconds=0)


    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("QUICKAPI_LOG_LEVEL", " debug ")
        assert AppSettings(_env_file=None).log_level == "DEBUG"

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("QUICKAPI_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)


class TestUserEnvFile:
    def test_user_env_file_follows_xdg(self, tmp_path):
        assert get_user_env_file() == tmp_path / "config" / "quickapi" / ".env"

    def test_write_merges_and_skips_none(self, tmp_path):
        env_path = tmp_path / "user.env"
        env_path.write_text("# comment\nQUICKAPI_API_KEY='old'\nQUICKAPI_USER_AGENT=ua\n", encoding="utf-8")

        write_user_env_vars(
            {"QUICKAPI_API_KEY": "new", "QUICKAPI_BASE_URL": None},
            env_path=env_path,
        )

        lines = env_path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("#")
        assert lines[1:] == ["QUICKAPI_API_KEY=new", "QUICKAPI_USER_AGENT=ua"]
