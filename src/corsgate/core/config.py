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
"""Layered corsgate configuration.

Values come from, in increasing priority:

1. packaged defaults (``corsgate/resources/corsgate-defaults.yaml``)
2. a YAML or TOML file and its ``{stem}-{profile}`` overlays
3. ``CORSGATE_*`` environment variables, consulted on every read

String values may reference ``${ENV_VAR}``, ``${other.config.key}`` or
``${KEY:fallback}``; they are expanded lazily by :meth:`Config.get`.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

ENV_PREFIX = "CORSGATE_"
DEFAULTS_RESOURCE = "corsgate-defaults.yaml"

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_LIST_SPLIT_RE = re.compile(r"\s+")
_MAX_PLACEHOLDER_DEPTH = 10
_TRUTHY = frozenset({"true", "1", "yes"})

_CONFIG_PROPERTIES_ATTR = "__corsgate_config_prefix__"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to the config section at *prefix*.

    Usage:
        @config_properties(prefix="corsgate.cors")
        @dataclass
        class CorsProperties:
            max_age: int = 5
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable consulted for *key*: ``corsgate.cors.max_age`` -> ``CORSGATE_CORS_MAX_AGE``."""
    return ENV_PREFIX + key.removeprefix("corsgate.").upper().replace(".", "_").replace("-", "_")


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f) or {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _read_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("corsgate.resources").joinpath(DEFAULTS_RESOURCE)
    with importlib.resources.as_file(resource) as p:
        return _read_file(p)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce(value: Any, expected: Any) -> Any:
    """Convert a raw config value to the declared field type where it is a string or list."""
    is_list = get_origin(expected) is list
    if not isinstance(value, str):
        return [str(item) for item in value] if is_list else value
    if expected is int:
        return int(value)
    if expected is float:
        return float(value)
    if expected is bool:
        return value.lower() in _TRUTHY
    if is_list:
        return [part for part in _LIST_SPLIT_RE.split(value) if part]
    return value


class Config:
    """Dot-notation view over nested configuration data."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Files merged into this config, in merge order."""
        return list(self._loaded_sources)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load *path* (YAML or TOML) on top of the packaged defaults.

        A missing *path* is not an error: the defaults alone are returned.
        Overlays named ``{stem}-{profile}{suffix}`` next to *path* are merged
        for each of *active_profiles*, in order.
        """
        path = Path(path)
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = _read_defaults()
            sources.append(f"{DEFAULTS_RESOURCE} (defaults)")

        if path.exists():
            data = _merge(data, _read_file(path))
            sources.append(str(path))
            for profile in active_profiles or []:
                overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
                if overlay.exists():
                    data = _merge(data, _read_file(overlay))
                    sources.append(f"{overlay} (profile: {profile})")

        config = cls(data)
        config._loaded_sources = sources
        return config

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at *key*, an environment override, or *default*."""
        env_val = os.environ.get(env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._expand(value)
        return value

    def _expand(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholder expansion too deep in '{value}'; check for circular references")

        def replace(match: re.Match[str]) -> str:
            ref, sep, fallback = match.group(1).partition(":")
            env_val = os.environ.get(ref)
            if env_val is not None:
                return env_val
            found = self._lookup(ref)
            if found is not None:
                text = str(found)
                return self._expand(text, depth + 1) if "${" in text else text
            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from its config section.

        Fields are read through :meth:`get`, so environment overrides apply.
        Missing fields keep their dataclass defaults.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is not None:
                kwargs[field.name] = _coerce(value, hints.get(field.name))
        return config_cls(**kwargs)
