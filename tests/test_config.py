import pytest

from lidcore.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.min_ngram_length == 1
    assert settings.max_ngram_length == 4
    assert settings.analyze_length == 0
    assert settings.language_list == ["da", "de", "en", "es", "fi", "fr", "it", "nl", "pt", "sv"]
    assert settings.short_text_threshold == 150
    assert settings.default_encoding == "utf-8"
    assert settings.min_confidence == -1


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIDCORE_LANGUAGES", " en, FR ,,de ")
    monkeypatch.setenv("LIDCORE_POOL_MAX_SIZE", "3")
    monkeypatch.setenv("LIDCORE_ANALYZE_LENGTH", "2000")
    settings = Settings()
    assert settings.language_list == ["en", "fr", "de"]
    assert settings.pool_max_size == 3
    assert settings.analyze_length == 2000


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
