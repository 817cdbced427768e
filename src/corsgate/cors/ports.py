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
"""Lifecycle ports a host drives the cors handler through.

The host calls them in order, each in its own phase:
construct → ``unmarshal`` → ``provision`` → ``validate`` → ``handle`` per request.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from starlette.types import ASGIApp, Receive, Scope, Send


@runtime_checkable
class ConfigUnmarshaler(Protocol):
    """Reads directive text into the handler's raw options."""

    def unmarshal(self, text: str) -> None: ...


@runtime_checkable
class Provisioner(Protocol):
    """Fills in defaults once, before validation."""

    def provision(self) -> None: ...


@runtime_checkable
class Validator(Protocol):
    """Checks the provisioned options; raises on fatal configuration errors."""

    def validate(self) -> None: ...


@runtime_checkable
class MiddlewareHandler(Protocol):
    """Handles one request and always forwards it to *next_app*."""

    async def handle(self, scope: Scope, receive: Receive, send: Send, next_app: ASGIApp) -> None: ...
