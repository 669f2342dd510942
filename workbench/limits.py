from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

import structlog

from workbench.settings import WorkbenchSettings

logger = structlog.get_logger(__name__)

_SKIP_PATH_PARTS = {"docs", "openapi.json", "brand", "favicon.ico"}


@dataclass(frozen=True)
class LimitPolicy:
    max_body: int | None = None
    timeout_seconds: float | None = None

    @property
    def unlimited(self) -> bool:
        return self.max_body is None and self.timeout_seconds is None


def _positive(value: float | None) -> float | None:
    if value is None or value <= 0:
        return None
    return value


def policy_for(module: str | None, settings: WorkbenchSettings) -> LimitPolicy:
    """Resolve the limits for a module, falling back to the global ones."""
    max_body = settings.body_limit()
    timeout = settings.timeout_limit()
    if module:
        body_overrides = settings.module_body_overrides()
        timeout_overrides = settings.module_timeout_overrides()
        if module in body_overrides:
            max_body = _positive(body_overrides[module])
        if module in timeout_overrides:
            timeout = _positive(timeout_overrides[module])
    return LimitPolicy(
        max_body=int(max_body) if max_body is not None else None,
        timeout_seconds=float(timeout) if timeout is not None else None,
    )


def resolve_module(path: str, root_path: str, mount_map: Dict[str, str]) -> str | None:
    root_path = root_path.rstrip("/")
    if root_path and root_path in mount_map:
        return mount_map[root_path]

    if not path.startswith("/"):
        path = "/" + path
    for mount in sorted(mount_map.keys(), key=len, reverse=True):
        if path == mount or path.startswith(f"{mount}/"):
            return mount_map[mount]
    return None


def _content_length(headers: Iterable[Tuple[bytes, bytes]]) -> int | None:
    for key, value in headers:
        if key.lower() == b"content-length":
            raw = value.decode("latin-1").strip()
            return int(raw) if raw.isdigit() else None
    return None


async def _send_text(send: Any, status_code: int, message: str) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": status_code,
            "headers": [(b"content-type", b"text/plain; charset=utf-8")],
        }
    )
    await send({"type": "http.response.body", "body": message.encode("utf-8")})


async def _buffer_body(
    receive: Any, max_body: int
) -> Tuple[List[Dict[str, Any]] | None, int]:
    """Drain the request body, giving up as soon as it exceeds ``max_body``."""
    messages: List[Dict[str, Any]] = []
    received = 0
    while True:
        message = await receive()
        messages.append(message)
        if message.get("type") != "http.request":
            break
        received += len(message.get("body", b"") or b"")
        if received > max_body:
            return None, received
        if not message.get("more_body"):
            break
    return messages, received


def _replay(messages: List[Dict[str, Any]], receive: Any) -> Any:
    pending = list(messages)

    async def replay_receive() -> Dict[str, Any]:
        if pending:
            return pending.pop(0)
        return await receive()

    return replay_receive


class RequestLimitsMiddleware:
    """Bound request size and duration before a tool ever sees the input."""

    def __init__(
        self,
        app: Any,
        *,
        mount_map: Dict[str, str],
        settings: WorkbenchSettings,
    ) -> None:
        self.app = app
        self.mount_map = mount_map
        self.settings = settings

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Any) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        parts = [part for part in path.split("/") if part]
        if any(part in _SKIP_PATH_PARTS for part in parts):
            await self.app(scope, receive, send)
            return

        module = resolve_module(path, scope.get("root_path", ""), self.mount_map)
        policy = policy_for(module, self.settings)
        if policy.unlimited:
            await self.app(scope, receive, send)
            return

        declared = _content_length(scope.get("headers", []))
        if policy.max_body is not None and declared is not None and declared > policy.max_body:
            logger.info("request.too_large", module=module, declared=declared)
            await _send_text(send, 413, "Payload too large")
            return

        started = False

        async def send_wrapper(message: Dict[str, Any]) -> None:
            nonlocal started
            if message.get("type") == "http.response.start":
                started = True
            await send(message)

        async def run_app() -> None:
            app_receive = receive
            if policy.max_body is not None:
                # Read the whole body up front so an undeclared (chunked) body
                # is measured before the app starts parsing it.
                messages, received = await _buffer_body(receive, policy.max_body)
                if messages is None:
                    logger.info("request.too_large", module=module, received=received)
                    await _send_text(send_wrapper, 413, "Payload too large")
                    return
                app_receive = _replay(messages, receive)
            await self.app(scope, app_receive, send_wrapper)

        try:
            if policy.timeout_seconds is not None:
                await asyncio.wait_for(run_app(), timeout=policy.timeout_seconds)
            else:
                await run_app()
        except asyncio.TimeoutError:
            logger.warning("request.timeout", module=module, path=path)
            if not started:
                await _send_text(send, 504, "Request timed out")
