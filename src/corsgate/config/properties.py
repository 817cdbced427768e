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
"""CORS configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from corsgate.core.config import config_properties


@config_properties(prefix="corsgate.cors")
@dataclass
class CorsProperties:
    """Raw, unvalidated options for the cors handler (corsgate.cors.*).

    Empty lists and a zero ``max_age`` mean "not configured"; defaults are
    filled in when the policy is provisioned.
    """

    allowed_origins: list[str] = field(default_factory=list)
    override_existing_cors: bool = False
    allowed_methods: list[str] = field(default_factory=list)
    allow_credentials: bool = False
    max_age: int = 0
    allowed_headers: list[str] = field(default_factory=list)
    exposed_headers: list[str] = field(default_factory=list)
