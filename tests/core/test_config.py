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
"""Tests for configuration system."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from corsgate.core.config import Config, config_properties, env_key


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "edge", "port": 8080}})
        assert config.get("app.name") == "edge"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_get_nested_value(self):
        config = Config({"corsgate": {"cors": {"max_age": 10}}})
        assert config.get("corsgate.cors.max_age") == 10

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "corsgate.yaml"
        config_file.write_text("corsgate:\n  cors:\n    max_age: 60\n")
        config = Config.from_file(config_file)
        assert config.get("corsgate.cors.max_age") == 60
        assert str(config_file) in config.loaded_sources

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "corsgate.toml"
        config_file.write_text('[corsgate.cors]\nallowed_origins = ["https://a.example"]\n')
        config = Config.from_file(config_file)
        assert config.get("corsgate.cors.allowed_origins") == ["https://a.example"]

    def test_defaults_loaded(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml")
        assert config.get("corsgate.cors.max_age") == 5
        assert config.get("corsgate.cors.allowed_origins") == ["*"]
        assert config.loaded_sources == ["corsgate-defaults.yaml (defaults)"]

    def test_defaults_can_be_skipped(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml", load_defaults=False)
        assert config.get("corsgate.cors.max_age") is None

    def test_env_var_override(self):
        os.environ["CORSGATE_CORS_MAX_AGE"] = "120"
        try:
            config = Config({"corsgate": {"cors": {"max_age": 5}}})
            assert config.get("corsgate.cors.max_age") == "120"
        finally:
            del os.environ["CORSGATE_CORS_MAX_AGE"]

    def test_profile_overlay(self, tmp_path: Path):
        base = tmp_path / "corsgate.yaml"
        base.write_text("corsgate:\n  cors:\n    max_age: 60\n    allow_credentials: false\n")
        (tmp_path / "corsgate-prod.yaml").write_text("corsgate:\n  cors:\n    allow_credentials: true\n")

        config = Config.from_file(base, active_profiles=["prod"], load_defaults=False)
        assert config.get("corsgate.cors.max_age") == 60
        assert config.get("corsgate.cors.allow_credentials") is True


class TestEnvKey:
    def test_strips_corsgate_prefix(self):
        assert env_key("corsgate.cors.max_age") == "CORSGATE_CORS_MAX_AGE"

    def test_other_keys_are_prefixed(self):
        assert env_key("edge.log-level") == "CORSGATE_EDGE_LOG_LEVEL"


class TestPlaceholderResolution:
    def test_resolve_env_var(self, monkeypatch):
        monkeypatch.setenv("FRONTEND_ORIGIN", "https://app.example.com")
        config = Config({"origin": "${FRONTEND_ORIGIN}"})
        assert config.get("origin") == "https://app.example.com"

    def test_resolve_with_default(self):
        config = Config({"origin": "${MISSING_ORIGIN_VAR:https://fallback.example}"})
        assert config.get("origin") == "https://fallback.example"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"origin": "${MISSING_ORIGIN_VAR}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("origin")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="edge")
        @dataclass
        class EdgeConfig:
            name: str = "default"
            workers: int = 1

        config = Config({"edge": {"name": "gateway", "workers": 4}})
        bound = config.bind(EdgeConfig)
        assert bound.name == "gateway"
        assert bound.workers == 4

    def test_bind_uses_defaults(self):
        @config_properties(prefix="edge")
        @dataclass
        class EdgeConfig:
            name: str = "default"

        assert Config({}).bind(EdgeConfig).name == "default"

    def test_bind_coerces_strings(self, monkeypatch):
        @config_properties(prefix="corsgate.edge")
        @dataclass
        class EdgeConfig:
            workers: int = 1
            secure: bool = False
            origins: list[str] = field(default_factory=list)

        monkeypatch.setenv("CORSGATE_EDGE_WORKERS", "8")
        monkeypatch.setenv("CORSGATE_EDGE_SECURE", "yes")
        monkeypatch.setenv("CORSGATE_EDGE_ORIGINS", "https://a.example  https://b.example")

        bound = Config({}).bind(EdgeConfig)
        assert bound.workers == 8
        assert bound.secure is True
        assert bound.origins == ["https://a.example", "https://b.example"]

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
