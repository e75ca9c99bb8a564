from __future__ import annotations

import logging

import pytest

from orgsync.config import (
    DEFAULT_GITHUB_API_URL,
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    env_flag,
    env_int,
    get_github_config,
    get_sync_config,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_reports_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("no", False), ("", False)],
)
def test_env_flag_parses_booleans(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool  # noqa: FBT001
) -> None:
    monkeypatch.setenv("ORGSYNC_DRY_RUN", raw)

    assert env_flag("ORGSYNC_DRY_RUN") is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORGSYNC_DRY_RUN", "maybe")

    with pytest.raises(ConfigurationError, match="ORGSYNC_DRY_RUN"):
        env_flag("ORGSYNC_DRY_RUN")


def test_env_int_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ORGSYNC_PAGE_SIZE", raising=False)

    assert env_int("ORGSYNC_PAGE_SIZE", default=7) == 7

    monkeypatch.setenv("ORGSYNC_PAGE_SIZE", "x")
    with pytest.raises(ConfigurationError):
        env_int("ORGSYNC_PAGE_SIZE", default=7)


def test_get_github_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    monkeypatch.setenv("GITHUB_ORGANIZATION", "acme")
    monkeypatch.delenv("GITHUB_API_URL", raising=False)

    config = get_github_config()

    assert config.organization == "acme"
    assert config.resilience.base_url == DEFAULT_GITHUB_API_URL
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["Authorization"] == "Bearer secret"
    assert config.resilience.retry.status_forcelist == frozenset()
    assert config.resilience.retry.total == 1


def test_get_github_config_prefers_explicit_organization(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    monkeypatch.delenv("GITHUB_ORGANIZATION", raising=False)
    monkeypatch.setenv("GITHUB_API_URL", "https://github.example.com/api/v3")

    config = get_github_config(organization="other")

    assert config.organization == "other"
    assert config.resilience.base_url == "https://github.example.com/api/v3"


def test_get_github_config_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    with pytest.raises(MissingConfigurationError, match="GITHUB_TOKEN"):
        get_github_config(organization="acme")


def test_get_github_config_requires_organization(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    monkeypatch.setenv("GITHUB_ORGANIZATION", "  ")

    with pytest.raises(MissingConfigurationError, match="GITHUB_ORGANIZATION"):
        get_github_config()


def test_get_sync_config_arguments_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORGSYNC_DRY_RUN", "true")
    monkeypatch.setenv("ORGSYNC_PAGE_SIZE", "25")

    assert get_sync_config().dry_run is True
    assert get_sync_config().page_size == 25
    assert get_sync_config(dry_run=False, page_size=50).dry_run is False
    assert get_sync_config(dry_run=False, page_size=50).page_size == 50


@pytest.mark.parametrize("page_size", [0, 101])
def test_get_sync_config_rejects_out_of_range_page_size(
    monkeypatch: pytest.MonkeyPatch, page_size: int
) -> None:
    monkeypatch.setenv("ORGSYNC_PAGE_SIZE", str(page_size))

    with pytest.raises(ConfigurationError, match="Page size"):
        get_sync_config()


def test_configure_logging_quiets_http_client() -> None:
    configure_logging(level=logging.INFO, force=True)

    assert logging.getLogger("httpx").level == logging.WARNING
