"""Riot API HTTP client with error handling and authentication."""

import asyncio
import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx
import structlog

from ..config import get_global_settings
from .errors import ParseError, RiotAPIError, TransportError, error_for_status

logger = structlog.get_logger(__name__)


class RiotAPIClient:
    """Thin Riot API client: one GET per call, typed errors, no retries."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_connections: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            api_key: Riot API key (uses config if None)
            timeout: Per-request timeout in seconds (uses config if None)
            max_connections: Upper bound on pooled connections
            transport: Custom httpx transport, mainly for tests
        """
        settings = get_global_settings()
        self.api_key = api_key or settings.riot_api_key
        self.timeout = timeout or settings.request_timeout
        self.max_connections = max_connections
        self.transport = transport

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "X-Riot-Token": self.api_key,
                        "Accept": "application/json",
                        "User-Agent": "riftstats/1.0",
                    }
                    limits = httpx.Limits(
                        max_keepalive_connections=self.max_connections,
                        max_connections=self.max_connections,
                    )

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout),
                        limits=limits,
                        transport=self.transport,
                    )

                    logger.info(
                        "Riot API client session started",
                        timeout=self.timeout,
                        max_connections=self.max_connections,
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    @staticmethod
    def build_path(path: str, path_params: Optional[Mapping[str, Any]] = None) -> str:
        """Fill a path template, URL-quoting every parameter."""
        if not path_params:
            return path
        quoted = {name: quote(str(value), safe="") for name, value in path_params.items()}
        return path.format(**quoted)

    async def fetch(
        self,
        base_url: str,
        path: str,
        path_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform a single GET against the Riot API.

        Args:
            base_url: Routing or platform base URL
            path: Path template, e.g. "/lol/match/v5/matches/{match_id}"
            path_params: Values substituted into the path template
            query_params: Query string parameters

        Returns:
            Decoded JSON document (dict or list)

        Raises:
            TransportError: Connection failure or timeout
            UpstreamClientError: Any 4xx response
            UpstreamServerError: Any 5xx response
            ParseError: 2xx response whose body is not JSON
        """
        await self.start_session()

        if self.session is None:
            raise RiotAPIError("Session not initialized")

        url = f"{base_url.rstrip('/')}{self.build_path(path, path_params)}"

        try:
            response = await self.session.get(url, params=query_params)
        except httpx.TimeoutException as e:
            logger.warning("Riot API request timed out", url=url, error=str(e))
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.warning("Riot API request failed", url=url, error=str(e))
            raise TransportError(f"Request failed: {e}") from e

        if not response.is_success:
            self._raise_for_status(response, url)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(
                f"Response body is not valid JSON: {e}",
                status_code=response.status_code,
                body=response.text[:500],
            ) from e

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        """Raise the typed error matching a non-2xx response."""
        status = response.status_code
        retry_after = None
        if status == 429:
            try:
                retry_after = float(response.headers.get("Retry-After", ""))
            except ValueError:
                retry_after = None

        body = self._decode_error_body(response)
        error = error_for_status(status, body=body, retry_after=retry_after)

        logger.warning(
            "Riot API error response",
            url=url,
            status_code=status,
            error_type=error.__class__.__name__,
        )
        raise error

    @staticmethod
    def _decode_error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response.text
