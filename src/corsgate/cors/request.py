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
"""Per-request view of the CORS-relevant request headers."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.datastructures import Headers
from starlette.types import Scope

ORIGIN = "Origin"
REQUEST_METHOD = "Access-Control-Request-Method"
REQUEST_HEADERS = "Access-Control-Request-Headers"


@dataclass(frozen=True)
class CorsRequest:
    """The parts of a request that CORS decisions depend on.

    Absent headers are represented by empty strings.
    """

    method: str
    origin: str = ""
    request_method: str = ""
    request_headers: str = ""

    @classmethod
    def from_headers(cls, method: str, headers: Headers) -> CorsRequest:
        return cls(
            method=method,
            origin=headers.get(ORIGIN, ""),
            request_method=headers.get(REQUEST_METHOD, ""),
            request_headers=headers.get(REQUEST_HEADERS, ""),
        )

    @classmethod
    def from_scope(cls, scope: Scope) -> CorsRequest:
        """Build from an ASGI ``http`` scope."""
        return cls.from_headers(scope["method"], Headers(scope=scope))
