"""Socket.IO subscription that delivers realtime notifications."""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from typing import Any, Awaitable, Callable, Sequence

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"

NotificationHandler = Callable[[Any], Awaitable[None] | None]
ClientFactory = Callable[[], Any]


def default_client_factory() -> socketio.AsyncClient:
    """Build a Socket.IO client that relies on the library's reconnection policy."""

    return socketio.AsyncClient(reconnection=True, logger=False, engineio_logger=False)


class PushChannel:
    """One authenticated realtime connection for the active session.

    Handlers registered with :meth:`on_notification` receive the raw event
    payload. :meth:`close` detaches every handler before disconnecting, so no
    handler runs once it has been called.
    """

    def __init__(
        self,
        url: str,
        token: str,
        *,
        client_factory: ClientFactory = default_client_factory,
        transports: Sequence[str] | None = None,
        connect_timeout: float = 5.0,
    ) -> None:
        self._url = url
        self._token = token
        self._client_factory = client_factory
        self._transports = list(transports) if transports else None
        self._connect_timeout = connect_timeout
        self._client: Any | None = None
        self._connect_task: asyncio.Task[None] | None = None
        self._attempted = asyncio.Event()
        self._handlers: list[NotificationHandler] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def connected(self) -> bool:
        return bool(self._client is not None and getattr(self._client, "connected", False))

    def on_notification(self, handler: NotificationHandler) -> None:
        """Register ``handler`` for inbound ``notification`` events."""

        if self._closed:
            raise RuntimeError("Cannot register handlers on a closed push channel")
        self._handlers.append(handler)

    async def open(self) -> None:
        """Connect to the push server using the session token.

        The connection is made by a background task that keeps retrying with
        the client's reconnection policy until it succeeds or the channel is
        closed. ``open`` returns after the first attempt, or after
        ``connect_timeout`` when that attempt has not finished yet.
        """

        if self._closed:
            raise RuntimeError("Cannot reopen a closed push channel")
        if self._client is not None:
            return

        client = self._client_factory()
        client.on("connect", self._handle_connect)
        client.on("connect_error", self._handle_connect_error)
        client.on("disconnect", self._handle_disconnect)
        client.on(NOTIFICATION_EVENT, self._handle_notification)
        self._client = client

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._connect(client))
        self._connect_task = task
        waiter = loop.create_task(self._attempted.wait())
        try:
            await asyncio.wait(
                {task, waiter},
                timeout=self._connect_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()

        if not task.done() and not self.connected:
            logger.warning(
                "Push channel to %s is not connected yet, retrying in the background", self._url
            )

    async def close(self) -> None:
        """Stop retrying, detach handlers and disconnect. Safe to call more than once."""

        if self._closed:
            return
        self._closed = True
        self._handlers.clear()

        task, self._connect_task = self._connect_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        client, self._client = self._client, None
        if client is None:
            return
        try:
            await client.disconnect()
        except Exception:  # pragma: no cover - transport specific failures
            logger.exception("Error while disconnecting the push channel")
        logger.info("Push channel closed")

    async def _connect(self, client: Any) -> None:
        try:
            await client.connect(
                self._url,
                auth={"token": self._token},
                transports=self._transports,
                wait_timeout=self._connect_timeout,
                retry=True,
            )
        except SocketConnectionError as exc:
            logger.warning("Push channel connection to %s failed: %s", self._url, exc)
        finally:
            self._attempted.set()

    async def _handle_connect(self) -> None:
        self._attempted.set()
        if self._closed:
            return
        logger.info("Push channel connected (sid=%s)", getattr(self._client, "sid", None))

    async def _handle_connect_error(self, data: Any = None) -> None:
        self._attempted.set()
        if self._closed:
            return
        logger.warning("Push channel connection error: %s", data)

    async def _handle_disconnect(self, *args: Any) -> None:
        if self._closed:
            return
        logger.info("Push channel disconnected")

    async def _handle_notification(self, payload: Any) -> None:
        for handler in list(self._handlers):
            if self._closed:
                return
            try:
                result = handler(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Notification handler %r failed", handler)


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationHandler",
    "PushChannel",
    "default_client_factory",
]
