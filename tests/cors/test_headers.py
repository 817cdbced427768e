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
"""Tests for CorsHeaderWriter and the existing-header strip pass."""

from __future__ import annotations

from starlette.datastructures import MutableHeaders

from corsgate.config.properties import CorsProperties
from corsgate.cors.headers import (
    CorsHeaderWriter,
    existing_cors_headers,
    is_cors_header,
    strip_existing_cors_headers,
)
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.request import CorsRequest

ORIGIN = "https://app.example.com"


def _policy(**kwargs) -> CorsPolicy:
    kwargs.setdefault("override_existing_cors", True)
    return CorsPolicy.from_properties(CorsProperties(**kwargs))


def _preflight(request_headers: str = "") -> CorsRequest:
    return CorsRequest(method="OPTIONS", origin=ORIGIN, request_method="POST", request_headers=request_headers)


def _simple(method: str = "GET") -> CorsRequest:
    return CorsRequest(method=method, origin=ORIGIN)


class TestPlanSimpleRequest:
    def test_minimal(self):
        planned = CorsHeaderWriter(_policy()).plan(_simple())

        assert planned == [
            ("Access-Control-Allow-Origin", ORIGIN),
            ("Vary", "Access-Control-Allow-Origin"),
        ]

    def test_echoes_origin_even_for_wildcard_policy(self):
        planned = dict(CorsHeaderWriter(_policy(allowed_origins=["*"])).plan(_simple()))
        assert planned["Access-Control-Allow-Origin"] == ORIGIN

    def test_exposed_headers(self):
        planned = dict(CorsHeaderWriter(_policy(exposed_headers=["X-Total", "X-Page"])).plan(_simple()))
        assert planned["Access-Control-Expose-Headers"] == "X-Total, X-Page"

    def test_no_preflight_headers(self):
        planned = dict(CorsHeaderWriter(_policy(allowed_headers=["X-A"])).plan(_simple()))

        assert "Access-Control-Allow-Methods" not in planned
        assert "Access-Control-Allow-Headers" not in planned
        assert "Access-Control-Max-Age" not in planned

    def test_bare_options_gets_expose_headers(self):
        policy = _policy(exposed_headers=["X-Total"])
        planned = dict(CorsHeaderWriter(policy).plan(_simple("OPTIONS")))

        assert planned["Access-Control-Expose-Headers"] == "X-Total"
        assert "Access-Control-Allow-Methods" not in planned

    def test_credentials(self):
        planned = CorsHeaderWriter(_policy(allow_credentials=True)).plan(_simple())
        assert planned[-1] == ("Access-Control-Allow-Credentials", "true")


class TestPlanPreflightRequest:
    def test_full_preflight_in_order(self):
        policy = _policy(
            allowed_methods=["GET", "POST"],
            allowed_headers=["Content-Type", "Authorization"],
            exposed_headers=["X-Total"],
            allow_credentials=True,
            max_age=600,
        )

        planned = CorsHeaderWriter(policy).plan(_preflight())

        assert planned == [
            ("Access-Control-Allow-Origin", ORIGIN),
            ("Vary", "Access-Control-Allow-Origin"),
            ("Access-Control-Allow-Methods", "GET, POST"),
            ("Access-Control-Allow-Headers", "Content-Type, Authorization"),
            ("Access-Control-Max-Age", "600"),
            ("Access-Control-Allow-Credentials", "true"),
        ]

    def test_default_methods_and_max_age(self):
        planned = dict(CorsHeaderWriter(_policy()).plan(_preflight()))

        assert planned["Access-Control-Allow-Methods"] == "GET, POST, PUT, DELETE, PATCH, OPTIONS"
        assert planned["Access-Control-Max-Age"] == "5"
        assert "Access-Control-Allow-Headers" not in planned

    def test_wildcard_headers_echo_request(self):
        planned = dict(CorsHeaderWriter(_policy(allowed_headers=["*"])).plan(_preflight("X-Custom")))
        assert planned["Access-Control-Allow-Headers"] == "X-Custom"

    def test_wildcard_headers_echo_empty_request(self):
        planned = dict(CorsHeaderWriter(_policy(allowed_headers=["X-A", "*"])).plan(_preflight()))
        assert planned["Access-Control-Allow-Headers"] == ""

    def test_zero_max_age_omitted(self):
        policy = CorsPolicy(override_existing_cors=True, max_age=0)
        planned = dict(CorsHeaderWriter(policy).plan(_preflight()))
        assert "Access-Control-Max-Age" not in planned

    def test_no_expose_headers_on_preflight(self):
        planned = dict(CorsHeaderWriter(_policy(exposed_headers=["X-Total"])).plan(_preflight()))
        assert "Access-Control-Expose-Headers" not in planned


class TestApply:
    def test_writes_when_override_enabled(self):
        headers = MutableHeaders()
        CorsHeaderWriter(_policy(allow_credentials=True)).apply(_simple(), headers)

        assert headers["access-control-allow-origin"] == ORIGIN
        assert headers["vary"] == "Access-Control-Allow-Origin"
        assert headers["access-control-allow-credentials"] == "true"

    def test_writes_nothing_when_override_disabled(self):
        headers = MutableHeaders()
        planned = CorsHeaderWriter(_policy(override_existing_cors=False)).apply(_simple(), headers)

        assert planned
        assert list(headers.keys()) == []

    def test_existing_header_untouched_when_override_disabled(self):
        headers = MutableHeaders(headers={"Access-Control-Allow-Origin": "https://other.example"})
        CorsHeaderWriter(_policy(override_existing_cors=False)).apply(_simple(), headers)

        assert headers["access-control-allow-origin"] == "https://other.example"

    def test_existing_header_replaced_when_override_enabled(self):
        headers = MutableHeaders(headers={"Access-Control-Allow-Origin": "https://other.example"})
        CorsHeaderWriter(_policy()).apply(_simple(), headers)

        assert headers.getlist("access-control-allow-origin") == [ORIGIN]

    def test_vary_is_appended(self):
        headers = MutableHeaders(headers={"Vary": "Accept-Encoding"})
        CorsHeaderWriter(_policy()).apply(_simple(), headers)

        assert headers["vary"] == "Accept-Encoding, Access-Control-Allow-Origin"


class TestExistingHeaders:
    def test_is_cors_header(self):
        assert is_cors_header("Access-Control-Allow-Origin")
        assert is_cors_header("access-control-max-age")
        assert not is_cors_header("Vary")

    def test_existing_cors_headers(self):
        headers = MutableHeaders(headers={"Access-Control-Allow-Origin": "*", "Content-Type": "text/plain"})
        assert existing_cors_headers(headers) == ["access-control-allow-origin"]

    def test_strip_when_override_enabled(self):
        headers = MutableHeaders(headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Private-Network": "true",
            "Content-Type": "text/plain",
        })

        removed = strip_existing_cors_headers(_policy(), headers)

        assert sorted(removed) == ["access-control-allow-origin", "access-control-allow-private-network"]
        assert list(headers.keys()) == ["content-type"]

    def test_strip_is_noop_when_override_disabled(self):
        headers = MutableHeaders(headers={"Access-Control-Allow-Origin": "*"})

        assert strip_existing_cors_headers(_policy(override_existing_cors=False), headers) == []
        assert headers["access-control-allow-origin"] == "*"
