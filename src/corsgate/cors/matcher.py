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
"""Origin admission against a policy's ``allowed_origins``."""

from __future__ import annotations

import logging

from corsgate.cors.policy import CorsPolicy, RegexOrigin, WildcardOrigin

logger = logging.getLogger(__name__)


def is_origin_allowed(policy: CorsPolicy, origin: str) -> bool:
    """Return ``True`` if *origin* is admitted by *policy*.

    Entries are tried in configured order. A wildcard entry admits everything
    as soon as it is reached; a regex entry that does not match (or did not
    compile) falls through to a literal comparison and then to the next entry.
    """
    for pattern in policy.allowed_origins:
        if isinstance(pattern, WildcardOrigin):
            logger.debug("cors origin %r admitted by wildcard", origin)
            return True

        if isinstance(pattern, RegexOrigin) and pattern.matches(origin):
            logger.debug("cors origin %r admitted by pattern %r", origin, pattern.text)
            return True

        if origin == pattern.text:
            logger.debug("cors origin %r admitted", origin)
            return True

    logger.debug("cors origin %r not admitted", origin)
    return False
