"""Shared fakes for the notification service and the Socket.IO transport."""

from __future__ import annotations

import inspect
import math
from typing import Any

import anyio
import httpx
import pytest
from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from socketio.exceptions import ConnectionError as SocketConnectionError

from notification_sync.config import Settings
from notification_sync.domain.entities import UserSession
from notification_sync.infrastructure.notifications import (
    NotificationApiClient,
    PushChannel,
)

BASE_URL = "http://testserver"
TOKEN = "test-token"


class FakeNotificationService:
    """In-memory stand-in for the SkillSwap notification endpoints."""

    def __init__(self) -> None:
        self.records: list[dict[str, Any]] = []
        self.failures: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[tuple[str, str]] = []
        self.authorization: list[str | None] = []
        self.last_query: dict[str, str] = {}
        self.last_body: Any = None
        self._gates: dict[int, tuple[anyio.Event, anyio.Event]] = {}
        self.app = self._build_app()

    def add(
        self,
        notification_id: str,
        *,
        recipient: str = "u1",
        read: bool = False,
        type: str = "project",
        link: str | None = "/projects/p1",
        created_at: str = "2024-05-02T10:00:00Z",
    ) -> dict[str, Any]:
        record = {
            "_id": notification_id,
            "recipient": recipient,
            "type": type,
            "title": f"Title {notification_id}",
            "message": f"Message {notification_id}",
            "link": link,
            "read": read,
            "createdAt": created_at,
        }
        self.records.append(record)
        return record

    def fail(self, method: str, path: str, status: int = 500, body: Any = None) -> None:
        """Make ``method path`` answer ``status`` with ``body`` (no body when ``None``)."""

        self.failures[(method, path)] = (status, body)

    def gate(self, page: int) -> tuple[anyio.Event, anyio.Event]:
        """Hold list requests for ``page`` until the returned release event is set."""

        entered, release = anyio.Event(), anyio.Event()
        self._gates[page] = (entered, release)
        return entered, release

    def unread(self) -> int:
        return sum(1 for record in self.records if not record["read"])

    def _find(self, notification_id: str) -> dict[str, Any] | None:
        for record in self.records:
            if record["_id"] == notification_id:
                return record
        return None

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.middleware("http")
        async def record_and_fail(request: Request, call_next):
            key = (request.method, request.url.path)
            self.requests.append(key)
            self.authorization.append(request.headers.get("authorization"))
            if key in self.failures:
                status, body = self.failures[key]
                if body is None:
                    return Response(status_code=status)
                return JSONResponse(body, status_code=status)
            return await call_next(request)

        @app.get("/notifications")
        async def list_notifications(request: Request, page: int = 1, limit: int = 20):
            self.last_query = dict(request.query_params)
            if page in self._gates:
                entered, release = self._gates.pop(page)
                entered.set()
                await release.wait()
            start = (page - 1) * limit
            return {
                "notifications": self.records[start : start + limit],
                "totalPages": max(1, math.ceil(len(self.records) / limit)),
                "currentPage": page,
                "total": len(self.records),
            }

        @app.get("/notifications/unread-count")
        async def unread_count():
            return {"unreadCount": self.unread()}

        @app.put("/notifications/read-all")
        async def read_all(body: dict | None = Body(default=None)):
            self.last_body = body
            for record in self.records:
                record["read"] = True
            return {"success": True, "preferences": {"email": {"enabled": True}}}

        @app.put("/notifications/preferences")
        async def update_preferences(body: dict = Body(...)):
            self.last_body = body
            return {"success": True, "preferences": body}

        @app.put("/notifications/{notification_id}/read")
        async def mark_read(notification_id: str):
            record = self._find(notification_id)
            if record is None:
                return JSONResponse({"message": "Notification not found"}, status_code=404)
            record["read"] = True
            return {"success": True}

        @app.delete("/notifications/{notification_id}")
        async def delete(notification_id: str):
            record = self._find(notification_id)
            if record is None:
                return JSONResponse({"message": "Notification not found"}, status_code=404)
            self.records.remove(record)
            return {"success": True}

        @app.post("/notifications/email")
        async def send_email(body: dict = Body(...)):
            self.last_body = body
            return {"success": True}

        @app.post("/notifications/sms")
        async def send_sms(body: dict = Body(...)):
            self.last_body = body
            return {"success": True}

        return app


class FakeSocketClient:
    """Implements the part of ``socketio.AsyncClient`` the push channel uses.

    With ``fail_connect`` the server starts out unreachable: a connect with
    ``retry=True`` reports ``connect_error`` and then keeps waiting until
    :meth:`bring_up` is called, as the real client keeps retrying.
    """

    def __init__(self, *, fail_connect: bool = False) -> None:
        self.fail_connect = fail_connect
        self.handlers: dict[str, Any] = {}
        self.connected = False
        self.connect_calls: list[dict[str, Any]] = []
        self.disconnect_calls = 0
        self.cancelled_connects = 0
        self.sid = "fake-sid"
        self._server_up = anyio.Event()
        if not fail_connect:
            self._server_up.set()

    def on(self, event: str, handler=None):
        self.handlers[event] = handler
        return handler

    def bring_up(self) -> None:
        self._server_up.set()

    async def connect(self, url, auth=None, transports=None, wait_timeout=1, retry=False):
        self.connect_calls.append(
            {
                "url": url,
                "auth": auth,
                "transports": transports,
                "wait_timeout": wait_timeout,
                "retry": retry,
            }
        )
        if not self._server_up.is_set():
            await self.trigger("connect_error", {"message": "refused"})
            if not retry:
                raise SocketConnectionError("Connection refused by the server")
            try:
                await self._server_up.wait()
            except BaseException:
                self.cancelled_connects += 1
                raise
        self.connected = True
        await self.trigger("connect")

    async def disconnect(self):
        self.disconnect_calls += 1
        self.connected = False

    async def trigger(self, event: str, *args: Any) -> None:
        """Deliver ``event`` to the registered handler, as the server would."""

        handler = self.handlers.get(event)
        if handler is None:
            return
        result = handler(*args)
        if inspect.isawaitable(result):
            await result


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def service() -> FakeNotificationService:
    return FakeNotificationService()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url=BASE_URL,
        notifications_path="/notifications",
        push_url="http://push.testserver",
        default_page_size=20,
        app_timezone="UTC",
    )


@pytest.fixture
def user_session() -> UserSession:
    return UserSession(user_id="u1", token=TOKEN)


@pytest.fixture
def make_api_client(service):
    """Build API clients wired to the fake service."""

    clients: list[NotificationApiClient] = []

    def factory(transport: httpx.AsyncBaseTransport | None = None) -> NotificationApiClient:
        client = NotificationApiClient(
            BASE_URL,
            TOKEN,
            transport=transport or httpx.ASGITransport(app=service.app),
            clock=lambda: 1_700_000_000.0,
        )
        clients.append(client)
        return client

    return factory


@pytest.fixture
def socket_clients() -> list[FakeSocketClient]:
    """Every fake Socket.IO client created during the test, in creation order."""

    return []


@pytest.fixture
def make_channel(socket_clients):
    def factory(*, fail_connect: bool = False, token: str = TOKEN) -> PushChannel:
        def client_factory() -> FakeSocketClient:
            client = FakeSocketClient(fail_connect=fail_connect)
            socket_clients.append(client)
            return client

        return PushChannel(
            "http://push.testserver",
            token,
            client_factory=client_factory,
            transports=["websocket"],
            connect_timeout=2.0,
        )

    return factory


@pytest.fixture
def refused_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)
