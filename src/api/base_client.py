import asyncio
import json
import random
import ssl as ssl_module
from types import TracebackType
from typing import Literal, Any, Self, Type

import aiohttp
import certifi
import ua_generator
from better_proxy import Proxy
from yarl import URL

from src.exceptions.api_exceptions import (
    APIClientError, APIConnectionError, APITimeoutError,
    APIRateLimitError, APIClientSideError,
    APIServerSideError, APISessionError, APISSLError
)


class BaseAPIClient:
    RETRYABLE_ERRORS = (
        APIServerSideError,
        APIRateLimitError,
        aiohttp.ClientError,
        asyncio.TimeoutError,
    )
    SESSION_BREAKING_ERRORS = (
        aiohttp.ClientOSError,
        aiohttp.ServerDisconnectedError,
        aiohttp.ClientSSLError,
    )

    def __init__(
        self,
        base_url: str,
        proxy: Proxy | None = None
    ) -> None:
        self.base_url: str = base_url
        self.proxy: Proxy | None = proxy
        self.session: aiohttp.ClientSession | None = None
        self._headers: dict[str, str] = self._generate_headers()
        self._ssl_context = ssl_module.create_default_context(cafile=certifi.where())

    @staticmethod
    def _generate_headers() -> dict[str, str]:
        user_agent = ua_generator.generate(
            device='desktop',
            platform='windows',
            browser='chrome'
        )

        return {
            'accept': 'application/json, text/plain, */*',
            'accept-language': 'en-US;q=0.9,en;q=0.8',
            'sec-ch-ua': user_agent.ch.brands,
            'sec-ch-ua-mobile': user_agent.ch.mobile,
            'sec-ch-ua-platform': user_agent.ch.platform,
            'user-agent': user_agent.text
        }

    async def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(ssl=self._ssl_context, limit=10),
                headers=self._headers
            )
        return self.session

    async def __aenter__(self) -> Self:
        await self._get_session()
        return self

    async def __aexit__(
        self,
        exc_type: Type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None
    ) -> None:
        await self.close()

    def _build_url(self, method: str | None, url: str | None) -> str:
        if url:
            return url
        if not method:
            raise APIClientError("Either url or method must be provided")
        return str(URL(self.base_url) / method.lstrip('/'))

    @staticmethod
    def _backoff(attempt: int, retry_delay: tuple[float, float]) -> float:
        return random.uniform(*retry_delay) * min(2 ** (attempt - 1), 30)

    @staticmethod
    def _parse_body(text: str, content_type: str) -> Any:
        if not text or not ('json' in content_type or text.lstrip().startswith(('{', '['))):
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return None

    async def _request_once(
        self,
        request_type: str,
        target_url: str,
        json_data: dict[str, Any] | None,
        params: dict[str, Any] | None,
        headers: dict[str, str],
        verify: bool,
        timeout: float,
    ) -> dict[str, Any]:
        session = await self._get_session()

        async with session.request(
            method=request_type,
            url=target_url,
            json=json_data,
            params=params,
            headers=headers,
            proxy=self.proxy.as_url if self.proxy else None,
            allow_redirects=False,
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as response:
            text = await response.text()
            status_code = response.status
            result = {
                "status_code": status_code,
                "url": str(response.url),
                "text": text,
                "data": self._parse_body(text, response.headers.get('Content-Type', '').lower()),
            }

        if verify:
            if status_code == 429:
                raise APIRateLimitError(f"Too many requests: {status_code}")
            if 400 <= status_code < 500:
                raise APIClientSideError(f"Client error: {status_code}", status_code, result)
            if status_code >= 500:
                raise APIServerSideError(f"Server error: {status_code}", status_code, result)

        return result

    @staticmethod
    def _wrap_error(error: BaseException, target_url: str, max_retries: int) -> APIClientError:
        if isinstance(error, APIClientError):
            if isinstance(error, APIRateLimitError):
                return error
            return APIServerSideError(
                f"The request failed after {max_retries} attempts to {target_url}: {error}",
                getattr(error, "status_code", None),
                {"error": str(error)}
            )
        if isinstance(error, asyncio.TimeoutError):
            return APITimeoutError(f"Request to {target_url} timed out")
        if isinstance(error, aiohttp.ClientSSLError):
            return APISSLError(f"SSL Error: {error}")
        if isinstance(error, aiohttp.ClientConnectorError):
            return APIConnectionError(f"Connection error: {error}")
        if isinstance(error, (aiohttp.ClientOSError, aiohttp.ServerDisconnectedError)):
            return APIConnectionError(f"Connection disrupted: {error}")
        return APIClientError(f"Unexpected error when querying {target_url}: {type(error).__name__}: {error}")

    async def send_request(
        self,
        request_type: Literal["POST", "GET", "PUT", "OPTIONS"] = "POST",
        method: str | None = None,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        url: str | None = None,
        headers: dict[str, str] | None = None,
        verify: bool = True,
        max_retries: int = 3,
        retry_delay: tuple[float, float] = (1.5, 5.0),
        timeout: float = 30.0
    ) -> dict[str, Any]:
        target_url = self._build_url(method, url)
        merged_headers = {**self._headers, **(headers or {})}

        for attempt in range(1, max_retries + 1):
            try:
                return await self._request_once(
                    request_type, target_url, json_data, params,
                    merged_headers, verify, timeout
                )

            except APIClientSideError:
                raise

            except RuntimeError as error:
                if "Session is closed" not in str(error):
                    raise
                self.session = None
                if attempt < max_retries:
                    await asyncio.sleep(self._backoff(attempt, retry_delay))
                    continue
                raise APISessionError(f"Session error: {error}") from error

            except self.RETRYABLE_ERRORS as error:
                if isinstance(error, self.SESSION_BREAKING_ERRORS):
                    await self.reset_session()
                if attempt < max_retries:
                    await asyncio.sleep(self._backoff(attempt, retry_delay))
                    continue
                raise self._wrap_error(error, target_url, max_retries) from error

        raise APIServerSideError(f"All {max_retries} attempts to {target_url} have been exhausted")

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def reset_session(self) -> None:
        await self.close()
