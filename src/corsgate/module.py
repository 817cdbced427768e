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
"""CorsModule — the cors handler as a host sees it."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.types import ASGIApp, Receive, Scope, Send

from corsgate.config.directive import parse_directive
from corsgate.config.properties import CorsProperties
from corsgate.core.config import Config
from corsgate.cors.policy import CorsPolicy, provision_properties, validate_properties
from corsgate.kernel.exceptions import ConfigurationException
from corsgate.web.middleware import CorsHandler, CorsMiddleware


@dataclass(frozen=True)
class ModuleInfo:
    id: str
    description: str


class CorsModule:
    """Host-facing cors handler implementing every lifecycle port.

    Usage::

        module = CorsModule()
        module.unmarshal(directive_text)
        module.provision()
        module.validate()
        app = module.wrap(app)
    """

    info = ModuleInfo(id="http.handlers.cors", description="Cross-Origin Resource Sharing")

    def __init__(self, properties: CorsProperties | None = None, strip_existing: bool = False) -> None:
        self.properties = properties if properties is not None else CorsProperties()
        self.strip_existing = strip_existing
        self._provisioned: CorsProperties | None = None
        self._handler: CorsHandler | None = None

    @classmethod
    def from_config(cls, config: Config, strip_existing: bool = False) -> CorsModule:
        return cls(config.bind(CorsProperties), strip_existing=strip_existing)

    def unmarshal(self, text: str) -> None:
        parse_directive(text, self.properties)

    def provision(self) -> None:
        self._provisioned = provision_properties(self.properties)

    def validate(self) -> None:
        if self._provisioned is None:
            raise ConfigurationException("CorsModule.validate() called before provision()")
        self._handler = CorsHandler(validate_properties(self._provisioned), strip_existing=self.strip_existing)

    @property
    def policy(self) -> CorsPolicy:
        return self._require_handler().policy

    async def handle(self, scope: Scope, receive: Receive, send: Send, next_app: ASGIApp) -> None:
        await self._require_handler().handle(scope, receive, send, next_app)

    def wrap(self, app: ASGIApp) -> CorsMiddleware:
        """Wrap *app* in a :class:`CorsMiddleware` using the validated policy."""
        handler = self._require_handler()
        return CorsMiddleware(app, policy=handler.policy, strip_existing=handler.strip_existing)

    def _require_handler(self) -> CorsHandler:
        if self._handler is None:
            raise ConfigurationException("CorsModule used before provision() and validate()")
        return self._handler
