"""GitHub configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class GitHubConfig:
    """Holds GitHub API configuration values."""

    token: str
    organization: str
    resilience: ResilienceConfig


def github_resilience(*, token: str, base_url: str = DEFAULT_GITHUB_API_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="github",
        base_url=base_url,
        timeout_seconds=GITHUB_TIMEOUT_SECONDS,
        # status codes are never retried; the GitHub client asks for one retry
        # after an exhausted primary quota resets
        retry=RetryPolicy(total=1),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        },
    )


def get_github_config(
    *,
    organization: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> GitHubConfig:
    token = require_env_var("GITHUB_TOKEN")
    base_url = os.getenv("GITHUB_API_URL", "").strip() or DEFAULT_GITHUB_API_URL
    return GitHubConfig(
        token=token,
        organization=organization or require_env_var("GITHUB_ORGANIZATION"),
        resilience=resilience or github_resilience(token=token, base_url=base_url),
    )
