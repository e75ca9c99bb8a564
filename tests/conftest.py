from __future__ import annotations

import pytest

_ENVIRONMENT = (
    "GITHUB_TOKEN",
    "GITHUB_ORGANIZATION",
    "GITHUB_API_URL",
    "ORGSYNC_FILE",
    "ORGSYNC_DRY_RUN",
    "ORGSYNC_PAGE_SIZE",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENVIRONMENT:
        monkeypatch.delenv(name, raising=False)
