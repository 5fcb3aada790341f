from pathlib import Path

from app.config import DEFAULT_BASE_URL, DEFAULT_SEARCH_MODEL, load_settings


def test_load_settings_defaults():
    settings = load_settings(env={})

    assert settings.gemini.api_key is None
    assert settings.gemini.base_url == DEFAULT_BASE_URL
    assert settings.gemini.model == "gemini-1.5-flash"
    assert settings.gemini.search_model == DEFAULT_SEARCH_MODEL
    assert settings.gemini.temperature == 0.7
    assert settings.gemini.api_key_file == Path("api_key.txt")
    assert settings.observability.log_level == "INFO"
    assert settings.observability.dump_dir is None


def test_load_settings_from_environment():
    settings = load_settings(
        env={
            "GEMINI_API_KEY": "k",
            "GEMINI_BASE_URL": "https://proxy.test/v1beta/",
            "GEMINI_MODEL": "gemini-2.5-pro",
            "GEMINI_TEMPERATURE": "0.85",
            "HTTP_TIMEOUT_SECONDS": "5",
            "DEBUG_DUMP_DIR": "dumps",
            "LOG_LEVEL": "DEBUG",
        }
    )

    assert settings.gemini.api_key == "k"
    assert settings.gemini.base_url == "https://proxy.test/v1beta"
    assert settings.gemini.model == "gemini-2.5-pro"
    assert settings.gemini.temperature == 0.85
    assert settings.gemini.timeout_seconds == 5.0
    assert settings.observability.dump_dir == Path("dumps")
    assert settings.observability.log_level == "DEBUG"
