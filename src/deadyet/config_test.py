import pytest

from deadyet.config import Settings


class TestSettings:
    """Test suite for environment based settings"""

    def test_defaults(self):
        """No variables gives the defaults"""
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.cache_size == 8192

    def test_overrides(self):
        """Every field can be set from the environment"""
        settings = Settings.from_env({
            "DEADYET_CACHE_SIZE": "128",
            "DEADYET_LOG_LEVEL": "debug",
            "DEADYET_JSON_LOGS": "yes",
            "DEADYET_API_HOST": "0.0.0.0",
            "DEADYET_API_PORT": "9000",
            "DEADYET_API_ENDPOINT": "http://example.test:9000/",
        })
        assert settings.cache_size == 128
        assert settings.log_level == "DEBUG"
        assert settings.json_logs is True
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 9000
        assert settings.api_endpoint == "http://example.test:9000"

    def test_bad_cache_size(self):
        """Non numeric and non positive sizes are rejected"""
        with pytest.raises(ValueError):
            Settings.from_env({"DEADYET_CACHE_SIZE": "lots"})
        with pytest.raises(ValueError):
            Settings.from_env({"DEADYET_CACHE_SIZE": "0"})

    def test_bad_bool(self):
        """Booleans must be recognisable"""
        with pytest.raises(ValueError):
            Settings.from_env({"DEADYET_JSON_LOGS": "maybe"})

    def test_reads_process_environment(self, monkeypatch):
        """Without a mapping the process environment is used"""
        monkeypatch.setenv("DEADYET_API_PORT", "8123")
        assert Settings.from_env().api_port == 8123
