"""Tests for config/settings: environment defaults, blank values, validation."""

import pytest

from turbo_status.config.settings import (
    MEMCACHED_HOST,
    MEMCACHED_PORT,
    REDIS_HOST,
    REDIS_PORT,
    SettingsError,
    get_database_settings,
    load_settings,
)


class TestDatabaseSettings:
    def test_defaults_when_unset(self):
        db = get_database_settings({})
        assert db.host == "database"
        assert db.user == "docker"
        assert db.password == "docker"
        assert db.driver == "mysql"
        assert db.port == 3306

    def test_unset_db_host_reads_default_from_os_environ(self, monkeypatch):
        monkeypatch.delenv("DB_HOST", raising=False)
        monkeypatch.delenv("DB_DRIVER", raising=False)
        monkeypatch.delenv("DB_PORT", raising=False)
        assert load_settings().database.host == "database"

    def test_blank_value_means_default(self):
        """DB_HOST= behaves like unset."""
        db = get_database_settings({"DB_HOST": "", "DB_USER": "  "})
        assert db.host == "database"
        assert db.user == "docker"

    def test_env_overrides(self):
        db = get_database_settings({"DB_HOST": "db.local", "DB_USER": "app", "DB_PASSWORD": "s3cret"})
        assert (db.host, db.user, db.password) == ("db.local", "app", "s3cret")

    def test_postgres_driver_default_port(self):
        db = get_database_settings({"DB_DRIVER": "Postgres"})
        assert db.driver == "postgres"
        assert db.port == 5432

    def test_explicit_port(self):
        assert get_database_settings({"DB_PORT": "13306"}).port == 13306

    def test_unknown_driver_rejected(self):
        with pytest.raises(SettingsError):
            get_database_settings({"DB_DRIVER": "oracle"})

    @pytest.mark.parametrize("port", ["abc", "0", "70000"])
    def test_bad_port_rejected(self, port):
        with pytest.raises(SettingsError):
            get_database_settings({"DB_PORT": port})


class TestLoadSettings:
    def test_cache_endpoints_are_fixed(self):
        s = load_settings({"REDIS_HOST": "elsewhere", "MEMCACHED_HOST": "elsewhere"})
        assert (s.redis.host, s.redis.port) == (REDIS_HOST, REDIS_PORT)
        assert (s.memcached.host, s.memcached.port) == (MEMCACHED_HOST, MEMCACHED_PORT)
        assert str(s.redis) == "redis:6379"

    def test_defaults(self):
        s = load_settings({})
        assert s.probe_timeout_sec == 1.0
        assert s.server_host == "0.0.0.0"
        assert s.server_port == 8765
        assert s.log_level == "INFO"

    def test_overrides(self):
        s = load_settings({"PROBE_TIMEOUT_SEC": "0.25", "STATUS_PORT": "9000", "STATUS_LOG_LEVEL": "debug"})
        assert s.probe_timeout_sec == 0.25
        assert s.server_port == 9000
        assert s.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_bad_timeout_rejected(self, value):
        with pytest.raises(SettingsError):
            load_settings({"PROBE_TIMEOUT_SEC": value})

    def test_bad_log_level_rejected(self):
        with pytest.raises(SettingsError):
            load_settings({"STATUS_LOG_LEVEL": "chatty"})
