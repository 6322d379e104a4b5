"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables and that
the grouped configuration views expose them correctly.
"""

from pathlib import Path

import pytest

from campaign_portal.server.core.config import AWSConfig, CORSConfig, SMSConfig, Settings


@pytest.fixture
def env_example_vars() -> dict[str, str]:
    """Parse the repository's .env.example file."""
    path = Path(__file__).resolve().parents[4] / ".env.example"
    env_vars = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_env_example_covers_every_setting(self, env_example_vars: dict[str, str]):
        aliases = {field.alias for field in Settings.model_fields.values()}
        undocumented = aliases - set(env_example_vars) - {"COMPLAINT_WARDS"}
        assert undocumented == set()

    def test_server_binding(self, monkeypatch):
        monkeypatch.setenv("CAMPAIGN_PORTAL_SERVER_PORT", "9000")
        monkeypatch.setenv("CAMPAIGN_PORTAL_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.server_port == 9000
        assert settings.log_level == "debug"

    def test_list_settings_from_json(self, monkeypatch):
        monkeypatch.setenv("COMPLAINT_WARDS", '["05", "06"]')
        monkeypatch.setenv("CORS_ORIGINS", '["https://campaign.example.org"]')
        settings = Settings()
        assert settings.complaint_wards == ["05", "06"]
        assert settings.cors.origins == ["https://campaign.example.org"]

    def test_default_wards(self, monkeypatch):
        monkeypatch.delenv("COMPLAINT_WARDS", raising=False)
        wards = Settings().complaint_wards
        assert wards[:2] == ["01", "17"]
        assert "54" in wards and "55" not in wards

    def test_negative_delivery_fee_is_rejected(self, monkeypatch):
        monkeypatch.setenv("STORE_DELIVERY_FEE", "-5")
        with pytest.raises(ValueError):
            Settings()


class TestGroupedConfig:
    """Test the grouped read-only views."""

    def test_aws_view(self, monkeypatch):
        monkeypatch.setenv("AWS_S3_BUCKET_NAME", "campaign-media")
        monkeypatch.setenv("AWS_CLOUDFRONT_DOMAIN", "cdn.example.org")
        aws = Settings().aws
        assert isinstance(aws, AWSConfig)
        assert aws.bucket_name == "campaign-media"
        assert aws.cloudfront_domain == "cdn.example.org"

    def test_aws_missing(self):
        aws = AWSConfig.model_validate({"AWS_ACCESS_KEY_ID": "id", "AWS_S3_BUCKET_NAME": "b"})
        assert aws.missing() == ["AWS_SECRET_ACCESS_KEY"]

    def test_sms_configured(self):
        assert not SMSConfig().configured
        assert SMSConfig.model_validate({"SMS_API_URL": "http://mock-sms", "SMS_API_KEY": "k"}).configured

    def test_session_view(self, monkeypatch):
        monkeypatch.setenv("SESSION_TTL_MINUTES", "30")
        session = Settings().session
        assert session.ttl_minutes == 30
        assert session.cookie_name == "campaign_session"

    def test_site_and_uploads_views(self, monkeypatch):
        monkeypatch.setenv("SITE_URL", "https://campaign.example.org")
        monkeypatch.setenv("CHUNK_TTL_SECONDS", "120")
        settings = Settings()
        assert settings.site.url == "https://campaign.example.org"
        assert settings.uploads.chunk_ttl_seconds == 120

    def test_cors_defaults(self):
        cors = CORSConfig()
        assert cors.origins == ["*"]
        assert cors.allow_credentials is True
