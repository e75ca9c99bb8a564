"""Rate-limited, retrying ``httpx.AsyncClient`` shared by the remote adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from orgsync.config.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResponseCheck,
    ResponseHook,
    RetryablePayloadError,
    RetryPolicy,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, RequestContent, URLTypes

__all__ = [
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "RetryablePayloadError",
    "build_retry",
]

log = getLogger(__name__)

_ALL_METHODS = ("DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")


def build_retry(policy: RetryPolicy, *, idempotent: bool = True) -> Retry:
    """Build the retry strategy for one class of request methods.

    Every method is retried when a response check raises
    :class:`RetryablePayloadError`; transport failures only when ``idempotent``.
    """

    exceptions: tuple[type[httpx.HTTPError], ...] = (RetryablePayloadError,)
    if idempotent:
        exceptions = (*exceptions, *policy.retry_on_exceptions)
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=_ALL_METHODS,
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class _CheckedTransport(httpx.AsyncBaseTransport):
    """Run response checks on every attempt, below the retry layer."""

    def __init__(self, transport: httpx.AsyncBaseTransport, checks: Sequence[ResponseCheck]) -> None:
        self._transport = transport
        self._checks = tuple(checks)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self._transport.handle_async_request(request)
        for check in self._checks:
            await check(request, response)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


class _MethodRetryTransport(httpx.AsyncBaseTransport):
    """Dispatch to the retry strategy matching the request method."""

    def __init__(self, transport: httpx.AsyncBaseTransport, policy: RetryPolicy) -> None:
        self._transport = transport
        self._idempotent_methods = policy.idempotent_methods
        self._idempotent = RetryTransport(transport=transport, retry=build_retry(policy))
        self._other = RetryTransport(
            transport=transport, retry=build_retry(policy, idempotent=False)
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.method in self._idempotent_methods:
            return await self._idempotent.handle_async_request(request)
        return await self._other.handle_async_request(request)

    async def aclose(self) -> None:
        await self._transport.aclose()


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None


class ResilientClient:
    """``httpx.AsyncClient`` with retries, a client-side rate limit and response hooks.

    ``transport`` replaces the network transport underneath the retry layer, which
    lets tests serve responses from ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = None
        if config.ratelimit is not None:
            self._limiter = AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)

        checked = _CheckedTransport(transport or httpx.AsyncHTTPTransport(), config.response_checks)
        hooks: list[ResponseHook] = list(config.response_hooks)
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            event_hooks={"response": hooks},
            transport=_MethodRetryTransport(checked, config.retry),
        )
        log.debug(
            "%s client ready: base_url=%s, ratelimit=%s, retries=%s",
            config.name,
            config.base_url,
            config.ratelimit,
            config.retry.total,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(method, url, **kwargs)
        async with self._limiter:
            return await self._client.request(method, url, **kwargs)
