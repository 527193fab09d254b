"""
Travel Sample API — Configuration Tests
=========================================
"""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_defaults_target_local_cluster():
    settings = Settings(_env_file=None)
    assert settings.db_conn_str == "couchbase://localhost"
    assert settings.db_bucket_name == "travel-sample"
    assert settings.db_scope_name == "inventory"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DB_CONN_STR", "couchbases://cb.example.cloud")
    monkeypatch.setenv("DB_BUCKET_NAME", "travel")
    settings = Settings(_env_file=None)
    assert settings.db_conn_str == "couchbases://cb.example.cloud"
    assert settings.db_bucket_name == "travel"


def test_missing_connection_values_all_reported():
    settings = Settings(_env_file=None, db_conn_str="", db_password=" ")
    with pytest.raises(ValueError) as exc_info:
        settings.validate_required_for_production()
    assert "DB_CONN_STR" in str(exc_info.value)
    assert "DB_PASSWORD" in str(exc_info.value)
    assert "DB_USERNAME" not in str(exc_info.value)


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_cors_origins_split():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
