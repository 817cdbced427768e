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
"""Unified exception hierarchy for corsgate.

All corsgate exceptions inherit from CorsGateException. Only configuration
problems are ever raised: request handling never signals failure itself.

Categories:
- ConfigurationException: invalid policy options or unparsable directives,
  raised once at startup and fatal for the policy being built.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CorsGateException(Exception):
    """Base exception for all corsgate errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(CorsGateException):
    """Configuration could not be loaded or is not usable."""


class InvalidCorsConfigurationException(ConfigurationException):
    """A CORS policy option failed validation."""


class DirectiveSyntaxException(ConfigurationException):
    """A ``cors`` directive block could not be parsed.

    The offending line number, when known, is stored in ``context["line"]``.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        context = {"line": line} if line is not None else {}
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message, code="DIRECTIVE_SYNTAX", context=context)
        self.line = line
