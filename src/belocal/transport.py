# SPDX-License-Identifier: Apache-2.0
"""HTTP transport for the BeLocal translation API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from belocal import __version__
from belocal.errors import BeLocalError, ConfigurationError, ErrorCode
from belocal.models import TranslateResponse

logger = logging.getLogger(__name__)


class Transport:
    """Sends JSON requests to the BeLocal API over one keep-alive session.

    Every outcome, including network and server failures, is returned as a
    ``TranslateResponse``; the send methods never raise.

    The session is not safe for concurrent use by several tasks. Use one
    transport per worker if you need parallel requests.
    """

    DEFAULT_BASE_URL = "https://dynamic.belocal.dev"
    SDK_NAME = "python"
    SDK_VERSION = __version__

    SINGLE_ENDPOINT = "/v1/translate"
    BATCH_ENDPOINT = "/v1/translate/batch"
    MULTI_ENDPOINT = "/v1/translate/multi"

    MAX_REDIRECTS = 5

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Transport.

        Args:
            api_key: BeLocal API key.
            base_url: API base URL (default: production endpoint).
            timeout: Overall request timeout in seconds.

        Raises:
            ConfigurationError: If API key is not provided or timeout is invalid.
        """
        if not api_key:
            raise ConfigurationError("BeLocal API key is required")
        if timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {timeout}")

        self._api_key = api_key
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def base_url(self) -> str:
        """Return API base URL without trailing slash."""
        return self._base_url

    @property
    def headers(self) -> dict[str, str]:
        """Headers attached to every request."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Connection": "keep-alive",
            "X-Sdk": self.SDK_NAME,
            "X-Sdk-Version": self.SDK_VERSION,
        }

    async def __aenter__(self) -> Transport:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                connector=aiohttp.TCPConnector(force_close=False),
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def send(self, data: dict[str, Any]) -> TranslateResponse:
        """Send a single-text request."""
        return await self._send_request(data, self.SINGLE_ENDPOINT)

    async def send_batch(self, data: dict[str, Any]) -> TranslateResponse:
        """Send a batch request (``{"batch": [...]}``)."""
        return await self._send_request(data, self.BATCH_ENDPOINT)

    async def send_multi(self, data: dict[str, Any]) -> TranslateResponse:
        """Send a multi request (``{"requests": [...]}``)."""
        return await self._send_request(data, self.MULTI_ENDPOINT)

    async def _send_request(
        self,
        data: dict[str, Any],
        endpoint: str,
    ) -> TranslateResponse:
        """POST ``data`` as JSON to ``endpoint`` and wrap the outcome.

        Args:
            data: JSON-serializable request body.
            endpoint: Path appended to the base URL.

        Returns:
            Response envelope.
        """
        try:
            body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        except UnicodeEncodeError as e:
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.INVALID_UTF8, f"Invalid UTF-8 string in request: {e}"),
            )
        except (TypeError, ValueError) as e:
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.JSON_ENCODE_FAILED, f"Failed to encode request: {e}"),
            )

        url = self._base_url + endpoint
        logger.debug("POST %s (%d bytes)", url, len(body))

        try:
            session = await self._ensure_session()
            async with session.post(
                url, data=body, max_redirects=self.MAX_REDIRECTS
            ) as response:
                status = response.status
                raw = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            errno = getattr(e, "errno", None)
            logger.debug("Request to %s failed: %r", url, e)
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.NETWORK, f"Request failed: {str(e) or type(e).__name__}"),
                errno=errno if isinstance(errno, int) else None,
            )
        except Exception as e:
            logger.exception("Unexpected error while calling %s", url)
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.UNCAUGHT, str(e) or type(e).__name__),
            )

        return self._parse_response(status, raw)

    @staticmethod
    def _parse_response(status: int, raw: str) -> TranslateResponse:
        """Map an HTTP status and body to an envelope."""
        if status == 402:
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.PAYMENT_REQUIRED, "Payment required"),
                status,
                raw=raw,
            )
        if status in (401, 403):
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.INVALID_API_KEY, "Invalid BeLocal API key"),
                status,
                raw=raw,
            )
        if status != 200:
            return TranslateResponse(
                None,
                False,
                BeLocalError(
                    ErrorCode.HTTP_NON_200,
                    f"API returned non-200 status code: {status}",
                ),
                status,
                raw=raw,
            )

        try:
            decoded = json.loads(raw)
        except ValueError:
            decoded = None
        if not isinstance(decoded, dict):
            return TranslateResponse(
                None,
                False,
                BeLocalError(ErrorCode.DECODE, "Invalid JSON response"),
                status,
                raw=raw,
            )

        return TranslateResponse(decoded, True, None, status, raw=raw)
