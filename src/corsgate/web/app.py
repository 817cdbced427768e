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
"""Starlette application factory with the CORS middleware installed."""

from __future__ import annotations

from collections.abc import Sequence

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from corsgate.cors.policy import CorsPolicy
from corsgate.web.middleware import CorsMiddleware


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    policy: CorsPolicy | None = None,
    strip_existing: bool = False,
    debug: bool = False,
    middleware: Sequence[Middleware] | None = None,
) -> Starlette:
    """Create a Starlette application whose requests pass through :class:`CorsMiddleware`.

    The CORS middleware is outermost; any extra *middleware* runs inside it,
    so headers those set are visible to it as existing headers.
    """
    stack: list[Middleware] = [
        Middleware(CorsMiddleware, policy=policy or CorsPolicy(), strip_existing=strip_existing),
    ]
    stack.extend(middleware or [])
    return Starlette(debug=debug, routes=list(routes or []), middleware=stack)
