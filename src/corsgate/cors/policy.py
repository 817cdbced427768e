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
"""CORS policy: origin patterns and the immutable, validated policy value."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from corsgate.config.properties import CorsProperties
from corsgate.kernel.exceptions import InvalidCorsConfigurationException

logger = logging.getLogger(__name__)

WILDCARD = "*"

DEFAULT_ALLOWED_ORIGINS: tuple[str, ...] = (WILDCARD,)
DEFAULT_ALLOWED_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS")

# https://fetch.spec.whatwg.org/#http-access-control-max-age
DEFAULT_MAX_AGE = 5
MAX_AGE_LIMIT = 86400


# =============================================================================
# Origin patterns
# =============================================================================


@dataclass(frozen=True)
class WildcardOrigin:
    """The ``*`` entry: admits every origin."""

    text: str = WILDCARD

    def matches(self, origin: str) -> bool:
        return True


def _anchor_end(text: str) -> str:
    if not text.endswith("$"):
        return text
    body = text[:-1]
    # an odd run of backslashes escapes the dollar
    if (len(body) - len(body.rstrip("\\"))) % 2:
        return text
    return body + r"\Z"


@dataclass(frozen=True)
class RegexOrigin:
    """An entry of the form ``^...$``, compiled once when the policy is built.

    A trailing ``$`` matches only at the very end of the origin, never before
    a final newline. ``compiled`` is ``None`` when the text is not a valid
    regular expression; such an entry never matches.
    """

    text: str
    compiled: re.Pattern[str] | None = field(default=None, compare=False, repr=False)

    @classmethod
    def compile(cls, text: str) -> RegexOrigin:
        try:
            return cls(text, re.compile(_anchor_end(text)))
        except re.error as exc:
            logger.warning("cors origin pattern %r does not compile: %s", text, exc)
            return cls(text, None)

    def matches(self, origin: str) -> bool:
        if self.compiled is None:
            return False
        return self.compiled.search(origin) is not None


@dataclass(frozen=True)
class ExactOrigin:
    """A literal origin compared for equality."""

    text: str

    def matches(self, origin: str) -> bool:
        return origin == self.text


OriginPattern = WildcardOrigin | RegexOrigin | ExactOrigin


def parse_origin_pattern(text: str) -> OriginPattern:
    """Classify one configured origin entry."""
    if text == WILDCARD:
        return WildcardOrigin()
    if text.startswith("^") and text.endswith("$"):
        return RegexOrigin.compile(text)
    return ExactOrigin(text)


# =============================================================================
# Policy
# =============================================================================


@dataclass(frozen=True)
class CorsPolicy:
    """Validated CORS policy, shared read-only by every request.

    Build it with :meth:`from_properties`, which applies defaults and
    validation. Direct construction skips both.
    """

    allowed_origins: tuple[OriginPattern, ...] = (WildcardOrigin(),)
    override_existing_cors: bool = False
    allowed_methods: tuple[str, ...] = DEFAULT_ALLOWED_METHODS
    allow_credentials: bool = False
    max_age: int = DEFAULT_MAX_AGE
    allowed_headers: tuple[str, ...] = ()
    exposed_headers: tuple[str, ...] = ()

    @property
    def origin_texts(self) -> list[str]:
        return [pattern.text for pattern in self.allowed_origins]

    @classmethod
    def from_properties(cls, props: CorsProperties) -> CorsPolicy:
        """Provision defaults into *props*, then validate and freeze them.

        Raises:
            InvalidCorsConfigurationException: If an ``allowed_methods`` entry
                contains a comma.
        """
        return validate_properties(provision_properties(props))


def provision_origins(origins: Sequence[str]) -> list[str]:
    if origins:
        return list(origins)
    logger.debug("cors allowed origins not set, allowing all origins")
    return list(DEFAULT_ALLOWED_ORIGINS)


def provision_methods(methods: Sequence[str]) -> list[str]:
    if methods:
        return list(methods)
    logger.debug("cors allowed methods not set, using defaults: %s", ", ".join(DEFAULT_ALLOWED_METHODS))
    return list(DEFAULT_ALLOWED_METHODS)


def validate_methods(methods: Sequence[str]) -> None:
    """Reject comma-joined method lists such as ``"GET, POST"``.

    Methods must be given as separate entries: ``["GET", "POST"]``.
    """
    for method in methods:
        if "," in method:
            raise InvalidCorsConfigurationException(
                "allowed_methods formatted incorrectly, list each method as a separate entry",
                code="CORS_METHODS",
                context={"method": method},
            )


def clamp_max_age(max_age: int) -> int:
    """Clamp *max_age* into ``[0, 86400]`` (24 hours)."""
    if max_age > MAX_AGE_LIMIT:
        logger.warning("cors max age %d capped to 24 hours (%d)", max_age, MAX_AGE_LIMIT)
        return MAX_AGE_LIMIT
    if max_age < 0:
        logger.warning("cors negative max age %d raised to zero", max_age)
        return 0
    return max_age


def provision_properties(props: CorsProperties) -> CorsProperties:
    """Return a copy of *props* with defaults filled in for unset options."""
    max_age = props.max_age
    if max_age == 0:
        max_age = DEFAULT_MAX_AGE
        logger.debug("cors max age not set, using default %d", max_age)
    return replace(
        props,
        allowed_origins=provision_origins(props.allowed_origins),
        allowed_methods=provision_methods(props.allowed_methods),
        max_age=max_age,
        allowed_headers=list(props.allowed_headers),
        exposed_headers=list(props.exposed_headers),
    )


def validate_properties(props: CorsProperties) -> CorsPolicy:
    """Validate provisioned *props* and freeze them into a :class:`CorsPolicy`.

    Origin patterns are compiled here, once.
    """
    validate_methods(props.allowed_methods)

    policy = CorsPolicy(
        allowed_origins=tuple(parse_origin_pattern(origin) for origin in props.allowed_origins),
        override_existing_cors=props.override_existing_cors,
        allowed_methods=tuple(props.allowed_methods),
        allow_credentials=props.allow_credentials,
        max_age=clamp_max_age(props.max_age),
        allowed_headers=tuple(props.allowed_headers),
        exposed_headers=tuple(props.exposed_headers),
    )
    logger.info(
        "cors configured: allowed_origins=%s override_existing_cors=%s allowed_methods=%s "
        "allow_credentials=%s max_age=%d allowed_headers=%s exposed_headers=%s",
        policy.origin_texts,
        policy.override_existing_cors,
        list(policy.allowed_methods),
        policy.allow_credentials,
        policy.max_age,
        list(policy.allowed_headers),
        list(policy.exposed_headers),
    )
    return policy
