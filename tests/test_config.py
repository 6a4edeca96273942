from contas.core import config as core_config


def test_defaults(monkeypatch):
    for name in ("API_BASE_URL", "HTTP_TIMEOUT_SECONDS", "NOTICE_TTL_SECONDS", "LANDING_PATH", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    settings = core_config.get_settings()
    assert settings.api_base_url == "http://localhost:8000"
    assert settings.notice_ttl_seconds == 5.0
    assert settings.landing_path == "/"
    assert settings.app_env == "dev"


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "abc")
    monkeypatch.setenv("NOTICE_TTL_SECONDS", "-1")
    monkeypatch.setenv("API_BASE_URL", "https://api.exemplo.com/")
    core_config.get_settings.cache_clear()
    settings = core_config.get_settings()
    assert settings.http_timeout_seconds == 10.0
    assert settings.notice_ttl_seconds == 5.0
    assert settings.api_base_url == "https://api.exemplo.com"
