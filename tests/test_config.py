"""Tests for settings parsing and AuditLog construction from settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from audit_trail.audit.store import InMemoryEventStore, SqlEventStore
from audit_trail.config import AuditSettings, DatabaseSettings, Settings
from audit_trail.main import build_audit_log


class TestAuditSettings:
    def test_default_writers(self):
        cfg = AuditSettings(_env_file=None)
        assert cfg.authorized_writers == frozenset({
            ".patient-identity",
            ".provider-verification",
            ".record-access",
        })

    def test_parses_comma_separated_writers(self):
        cfg = AuditSettings(_env_file=None, audit_authorized_writers=" .a , .b,,.c ")
        assert cfg.authorized_writers == frozenset({".a", ".b", ".c"})

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("AUDIT_ADMIN_PRINCIPAL", "ST1ADMIN")
        monkeypatch.setenv("AUDIT_AUTHORIZED_WRITERS", ".only-one")

        cfg = AuditSettings(_env_file=None)

        assert cfg.audit_admin_principal == "ST1ADMIN"
        assert cfg.authorized_writers == frozenset({".only-one"})


class TestSettingsValidation:
    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, log_level="warning").log_level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_invalid_storage_backend(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(_env_file=None, storage_backend="redis")

    def test_is_production(self):
        assert Settings(_env_file=None, environment="production").is_production is True
        assert Settings(_env_file=None).is_production is False


class TestBuildAuditLog:
    def _settings(self, **db):
        return Settings(
            _env_file=None,
            audit=AuditSettings(_env_file=None, audit_admin_principal="ST1ADMIN"),
            db=DatabaseSettings(_env_file=None, **db),
        )

    def test_memory_backend(self):
        log = build_audit_log(self._settings())
        assert log.admin == "ST1ADMIN"
        assert isinstance(log._store, InMemoryEventStore)

    def test_sql_backend(self):
        log = build_audit_log(self._settings(storage_backend="sql", database_url="sqlite://"))
        assert isinstance(log._store, SqlEventStore)
        assert log.event_count == 0

    def test_missing_admin_rejected(self):
        cfg = Settings(_env_file=None, audit=AuditSettings(_env_file=None, audit_admin_principal=""))
        with pytest.raises(ValueError, match="AUDIT_ADMIN_PRINCIPAL"):
            build_audit_log(cfg)
