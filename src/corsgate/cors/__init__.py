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
"""corsgate CORS — origin matching, preflight classification and header writing."""

from corsgate.cors.headers import CorsHeaderWriter, log_existing_cors_headers, strip_existing_cors_headers
from corsgate.cors.matcher import is_origin_allowed
from corsgate.cors.policy import (
    CorsPolicy,
    ExactOrigin,
    OriginPattern,
    RegexOrigin,
    WildcardOrigin,
    parse_origin_pattern,
)
from corsgate.cors.ports import ConfigUnmarshaler, MiddlewareHandler, Provisioner, Validator
from corsgate.cors.preflight import is_preflight
from corsgate.cors.request import CorsRequest

__all__ = [
    "ConfigUnmarshaler",
    "CorsHeaderWriter",
    "CorsPolicy",
    "CorsRequest",
    "ExactOrigin",
    "MiddlewareHandler",
    "OriginPattern",
    "Provisioner",
    "RegexOrigin",
    "Validator",
    "WildcardOrigin",
    "is_origin_allowed",
    "is_preflight",
    "log_existing_cors_headers",
    "parse_origin_pattern",
    "strip_existing_cors_headers",
]
