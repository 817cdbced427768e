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
"""StructlogAdapter — structlog-backed LoggingPort used by the CLI and host apps.

corsgate modules log through ``logging.getLogger(__name__)`` and stay silent
until a host configures logging. This adapter renders those stdlib records,
and events from :meth:`StructlogAdapter.get_logger`, with structlog on stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from corsgate.core.config import Config

FORMATS = ("console", "json")


def _level_number(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def build_formatter(fmt: str) -> structlog.stdlib.ProcessorFormatter:
    """stdlib formatter rendering every record as JSON or console output."""
    renderer = structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer()
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


class StructlogAdapter:
    """Render corsgate log records with structlog on stderr.

    Config keys: ``corsgate.logging.format`` (``console`` or ``json``),
    ``corsgate.logging.level.root`` and ``corsgate.logging.level.<logger>``
    for per-logger overrides such as ``corsgate.cors.matcher: DEBUG``.
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = {k: str(v) for k, v in config.get_section("corsgate.logging.level").items() if k != "root"}
        self.configure_levels(
            root=str(config.get("corsgate.logging.level.root", "INFO")),
            fmt=str(config.get("corsgate.logging.format", "console")),
            module_levels=levels,
        )

    def configure_levels(self, root: str, fmt: str = "console", module_levels: dict[str, str] | None = None) -> None:
        """Configure logging directly, without a Config object."""
        fmt = fmt.lower()
        if fmt not in FORMATS:
            fmt = "console"
        self._root_level = root.upper()
        self._format = fmt
        self._module_levels = {name: level.upper() for name, level in (module_levels or {}).items()}

        structlog.configure(
            processors=[*shared_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(build_formatter(self._format))
        logging.basicConfig(handlers=[handler], level=_level_number(self._root_level), force=True)

        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level_number(level))
