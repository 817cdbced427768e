# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""CORS middleware for Starlette — pure ASGI."""

from __future__ import annotations

import logging
from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from corsgate.cors.headers import CorsHeaderWriter, log_existing_cors_headers, strip_existing_cors_headers
from corsgate.cors.matcher import is_origin_allowed
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.preflight import is_preflight
from corsgate.cors.request import CorsRequest

logger = logging.getLogger(__name__)


def _log_existing_on_start(send: Send) -> Send:
    async def send_logging_cors(message: Any) -> None:
        if message["type"] == "http.response.start":
            log_existing_cors_headers(MutableHeaders(raw=list(message.get("headers", []))))
        await send(message)

    return send_logging_cors


class CorsHandler:
    """Per-request CORS handling over a fixed policy.

    The downstream app is called exactly once for every request, preflight
    included; this handler never answers a request itself. Headers are
    computed before the downstream app runs and written into its
    ``http.response.start`` message.

    Args:
        policy: The validated policy.
        strip_existing: Remove ``Access-Control-*`` headers set downstream
            before writing the computed ones. Only takes effect when the
            policy has ``override_existing_cors`` set, and only for requests
            whose origin is admitted; responses to other requests keep their
            downstream CORS headers.
    """

    def __init__(self, policy: CorsPolicy, strip_existing: bool = False) -> None:
        self.policy = policy
        self.strip_existing = strip_existing
        self._writer = CorsHeaderWriter(policy)

    async def handle(self, scope: Scope, receive: Receive, send: Send, next_app: ASGIApp) -> None:
        if scope["type"] != "http":
            await next_app(scope, receive, send)
            return

        request = CorsRequest.from_scope(scope)
        if not request.origin:
            logger.debug("cors no origin header, skipping")
            await next_app(scope, receive, send)
            return

        if not is_origin_allowed(self.policy, request.origin):
            await next_app(scope, receive, _log_existing_on_start(send))
            return

        if is_preflight(request):
            logger.debug("cors preflight request from %r for %s", request.origin, request.request_method)
        planned = self._writer.plan(request)

        async def send_with_cors(message: Any) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                if self.strip_existing:
                    strip_existing_cors_headers(self.policy, headers)
                self._writer.write(planned, headers)
            await send(message)

        await next_app(scope, receive, send_with_cors)


class CorsMiddleware:
    """Applies a :class:`CorsPolicy` to every HTTP request.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so responses
    are streamed through untouched apart from their headers.
    """

    def __init__(self, app: ASGIApp, policy: CorsPolicy | None = None, strip_existing: bool = False) -> None:
        self.app = app
        self._handler = CorsHandler(policy or CorsPolicy(), strip_existing=strip_existing)

    @property
    def policy(self) -> CorsPolicy:
        return self._handler.policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._handler.handle(scope, receive, send, self.app)
