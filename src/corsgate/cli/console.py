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
"""Rich console and styles for corsgate CLI output."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

CORSGATE_THEME = Theme({
    "allowed": "bold green",
    "denied": "bold yellow",
    "error": "bold red",
    "option": "cyan",
    "header.name": "bold cyan",
    "muted": "dim",
})

console = Console(theme=CORSGATE_THEME)


def print_headers(headers: Iterable[tuple[str, str]]) -> None:
    """Print ``Name: value`` lines without wrapping long values."""
    for name, value in headers:
        console.print(f"[header.name]{name}[/header.name]: {escape(value)}", soft_wrap=True)
