"""
Tests for configuration
"""

from horizon_api.config import Settings


class TestSettings:
    """Test Settings"""

    def test_defaults(self):
        config = Settings(_env_file=None, OWNER_PRIVATE_KEY="abc")
        assert config.PORT == 8080
        assert config.RATE_LIMIT_WINDOW_SECONDS == 900

    def test_validate_required_missing(self):
        config = Settings(_env_file=None, OWNER_PRIVATE_KEY="")
        assert config.validate_required() == ["OWNER_PRIVATE_KEY"]

    def test_validate_required_blank(self):
        config = Settings(_env_file=None, OWNER_PRIVATE_KEY="   ")
        assert config.validate_required() == ["OWNER_PRIVATE_KEY"]

    def test_validate_required_present(self):
        config = Settings(_env_file=None, OWNER_PRIVATE_KEY="0xabc")
        assert config.validate_required() == []

    def test_cors_origins(self):
        config = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test,,")
        assert config.get_cors_origins() == ["http://a.test", "http://b.test"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_MAX_REQUESTS", "7")
        assert Settings(_env_file=None).RATE_LIMIT_MAX_REQUESTS == 7
