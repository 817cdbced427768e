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
"""CORS response header computation and writing."""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders

from corsgate.cors.policy import WILDCARD, CorsPolicy
from corsgate.cors.preflight import is_preflight
from corsgate.cors.request import CorsRequest

logger = logging.getLogger(__name__)

CORS_HEADER_PREFIX = "access-control-"

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"
VARY = "Vary"


def is_cors_header(name: str) -> bool:
    return name.lower().startswith(CORS_HEADER_PREFIX)


def existing_cors_headers(headers: MutableHeaders) -> list[str]:
    """Names of ``Access-Control-*`` headers already on the response."""
    seen: list[str] = []
    for name in headers.keys():
        if is_cors_header(name) and name not in seen:
            seen.append(name)
    return seen


def log_existing_cors_headers(headers: MutableHeaders) -> list[str]:
    """Log each ``Access-Control-*`` header already on the response; returns their names."""
    existing = existing_cors_headers(headers)
    for name in existing:
        logger.debug("cors header already set: %s", name)
    return existing


def strip_existing_cors_headers(policy: CorsPolicy, headers: MutableHeaders) -> list[str]:
    """Remove every ``Access-Control-*`` header when the policy overrides.

    Does nothing unless ``override_existing_cors`` is set. Returns the names
    that were removed.
    """
    if not policy.override_existing_cors:
        return []
    removed = existing_cors_headers(headers)
    for name in removed:
        logger.debug("cors removing existing header %s", name)
        del headers[name]
    return removed


class CorsHeaderWriter:
    """Computes and writes the CORS headers for an admitted request.

    Headers are only written when the policy has ``override_existing_cors``
    set; otherwise :meth:`write` logs them but leaves the response untouched.
    """

    def __init__(self, policy: CorsPolicy) -> None:
        self._policy = policy

    def plan(self, request: CorsRequest) -> list[tuple[str, str]]:
        """Return the ``(name, value)`` pairs owed to *request*, in write order."""
        policy = self._policy
        planned: list[tuple[str, str]] = [
            (ALLOW_ORIGIN, request.origin),
            (VARY, ALLOW_ORIGIN),
        ]

        if is_preflight(request):
            planned.append((ALLOW_METHODS, ", ".join(policy.allowed_methods)))

            if policy.allowed_headers:
                if WILDCARD in policy.allowed_headers:
                    planned.append((ALLOW_HEADERS, request.request_headers))
                else:
                    planned.append((ALLOW_HEADERS, ", ".join(policy.allowed_headers)))

            if policy.max_age > 0:
                planned.append((MAX_AGE, str(policy.max_age)))
        elif policy.exposed_headers:
            planned.append((EXPOSE_HEADERS, ", ".join(policy.exposed_headers)))

        if policy.allow_credentials:
            planned.append((ALLOW_CREDENTIALS, "true"))

        return planned

    def write(self, planned: list[tuple[str, str]], headers: MutableHeaders) -> None:
        """Write previously planned headers, honoring ``override_existing_cors``."""
        log_existing_cors_headers(headers)

        for name, value in planned:
            logger.debug("cors setting header %s: %s", name, value)
            if not self._policy.override_existing_cors:
                continue
            if name == VARY:
                headers.add_vary_header(value)
            else:
                headers[name] = value

    def apply(self, request: CorsRequest, headers: MutableHeaders) -> list[tuple[str, str]]:
        """Plan and write the headers for *request*; returns the plan."""
        planned = self.plan(request)
        self.write(planned, headers)
        return planned
