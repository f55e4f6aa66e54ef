"""Asynchronous HTTP communication utilities.

The ``AsyncHttp`` client wraps a single aiohttp session, applies a per-request total timeout
with a short connect timeout, decodes responses by content type and maps aiohttp failures
onto ``AsyncCommError`` / ``AsyncCommTimeoutError`` so callers handle one error family.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final, Literal, Self

import aiohttp
from aiohttp.client import ClientSession

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from aiohttp.client import ClientResponse


__all__: list[str] = ["AsyncCommError", "AsyncCommInvalidContentTypeError", "AsyncCommTimeoutError", "AsyncHttp"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod = Literal["GET", "POST"]

CONNECT_TIMEOUT: Final[float] = 3.0


class AsyncHttp:
    """Asynchronous HTTP client with content type handlers.

    The session is created lazily on first use (or when entering the context) so that the
    client can be constructed outside a running event loop.
    """

    def __init__(self) -> None:
        """Register the default content type handlers.

        The default handlers are:
            - "text/plain": Decodes bytes to a UTF-8 string.
            - "application/json": Parses bytes as JSON.
        """
        logger.debug("%s initializing", self.__class__.__name__)
        self.__session: ClientSession | None = None
        self.content_handlers: dict[str, Callable[[bytes], Any]] = {}

        self.add_handler("text/plain", lambda x: x.decode("utf-8"))
        self.add_handler("application/json", lambda x: json.loads(x.decode("utf-8")))

    async def __aenter__(self) -> Self:
        self.initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    def initialize_session(self) -> None:
        """Create the aiohttp session if there is no open one."""
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession()
            logger.debug("%s session initialized", self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        """Return the open aiohttp session, creating it when needed."""
        self.initialize_session()
        if self.__session is None:
            msg = "Session is not initialized"
            raise RuntimeError(msg)
        return self.__session

    @property
    def is_open(self) -> bool:
        """True while the session exists and has not been closed."""
        return self.__session is not None and not self.__session.closed

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session and not self.__session.closed:
            await self.__session.close()
            logger.debug("%s session closed", self.__class__.__name__)
        self.__session = None

    async def get(self, *, url: str, total_timeout: float = 10.0) -> Any:
        """Perform a GET request and return the decoded body.

        Args:
            url (str): Request URL.
            total_timeout (float): Total timeout in seconds. 0 or negative disables it.

        Returns:
            Any: Decoded response body.
        """
        return await self._request("GET", url=url, total_timeout=total_timeout)

    async def post(self, *, url: str, data: Any | None = None, total_timeout: float = 10.0) -> Any:
        """Perform a POST request with a JSON body and return the decoded body.

        Args:
            url (str): Request URL.
            data (Any | None): JSON-serializable request body.
            total_timeout (float): Total timeout in seconds. 0 or negative disables it.

        Returns:
            Any: Decoded response body.
        """
        return await self._request("POST", url=url, total_timeout=total_timeout, json=data)

    async def decode_response(self, resp: ClientResponse) -> Any:
        """Decode a response body with the handler registered for its content type.

        Args:
            resp (ClientResponse): The aiohttp response.

        Returns:
            Any: Decoded data, or None for an empty body.

        Raises:
            AsyncCommInvalidContentTypeError: If no handler is registered for the content type.
        """
        content_type: str = resp.headers.get("Content-Type", "").split(";")[0].strip()
        raw: bytes = await resp.read()
        if not raw:
            logger.debug("Received empty response")
            return None

        handler: Callable[[bytes], Any] | None = self.content_handlers.get(content_type)
        if handler is None:
            msg: str = f"Unknown Content-Type '{content_type}'"
            raise AsyncCommInvalidContentTypeError(msg)
        try:
            return handler(raw)
        except (UnicodeDecodeError, ValueError) as err:
            msg = f"Malformed '{content_type}' response body"
            raise AsyncCommError(msg) from err

    def add_handler(self, content_type: str, handler: Callable[[bytes], Any]) -> None:
        """Register (or replace) the decoder for a content type."""
        if content_type in self.content_handlers:
            logger.warning("Handler for content type '%s' already exists, replacing it", content_type)
        self.content_handlers[content_type] = handler

    @staticmethod
    def _build_timeout(total_timeout: float) -> aiohttp.ClientTimeout:
        if total_timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if total_timeout < CONNECT_TIMEOUT:
            # a connect timeout longer than the total would never apply
            return aiohttp.ClientTimeout(total=total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

    async def _request(self, method: HTTPMethod, *, url: str, total_timeout: float, **kwargs: Any) -> Any:
        """Perform one HTTP request. The call never retries.

        Raises:
            AsyncCommTimeoutError: If the total timeout elapses; the request is cancelled.
            AsyncCommError: On connection failures and non-success status codes.
        """
        logger.debug("[%s] url=%s timeout=%s", method, url, total_timeout)
        try:
            async with self.session.request(
                method=method,
                url=url,
                timeout=self._build_timeout(total_timeout),
                **kwargs,
            ) as resp:
                resp.raise_for_status()
                return await self.decode_response(resp)

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "The server is not running, or the port is closed."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientResponseError as err:
            logger.debug(err)
            msg = "Error response from the server."
            raise AsyncCommError(msg, response=err) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP client error: {err}"
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors.

    Attributes:
        msg (str): Error message, suffixed with the HTTP status when available.
        status (int | None): HTTP status code of an error response.
    """

    def __init__(self, msg: str | BaseException, **kwargs: Any) -> None:
        self.msg: str = str(msg)
        self.status: int | None = None

        rsp: aiohttp.ClientResponseError | None = kwargs.pop("response", None)
        if isinstance(rsp, aiohttp.ClientResponseError):
            self.status = rsp.status
            self.msg = f"{self.msg}: status='{rsp.status}'"

        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """The request did not complete within its timeout and was cancelled."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """The response content type has no registered handler."""
