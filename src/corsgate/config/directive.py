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
"""Parser for the ``cors`` directive block.

Syntax::

    cors [origin ...] {
        allowed_origins <origin ...>
        override_existing_cors true|false
        allowed_methods <method ...>
        allow_credentials true|false
        max_age <seconds>
        allowed_headers <header ...>
        exposed_headers <header ...>
    }

Inline arguments after ``cors`` set ``allowed_origins``. The block is
optional; ``cors { }`` on one line is an empty block. When several ``cors``
directives appear, later ones update the same properties. Only the literal
``true`` enables a boolean option.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterator
from pathlib import Path

from corsgate.config.properties import CorsProperties
from corsgate.kernel.exceptions import DirectiveSyntaxException

DIRECTIVE_NAME = "cors"

_LIST_OPTIONS = frozenset({"allowed_origins", "allowed_methods", "allowed_headers", "exposed_headers"})
_BOOL_OPTIONS = frozenset({"override_existing_cors", "allow_credentials"})


def _tokenize(line: str, lineno: int) -> list[str]:
    # Backslashes are kept verbatim so regex origins survive.
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.commenters = "#"
    try:
        return list(lexer)
    except ValueError as exc:
        raise DirectiveSyntaxException(str(exc), line=lineno) from exc


def _lines(text: str) -> Iterator[tuple[int, list[str]]]:
    for lineno, raw in enumerate(text.splitlines(), start=1):
        tokens = _tokenize(raw, lineno)
        if tokens:
            yield lineno, tokens


def _apply_option(props: CorsProperties, name: str, args: list[str], lineno: int) -> None:
    if name in _LIST_OPTIONS:
        setattr(props, name, list(args))
    elif name in _BOOL_OPTIONS:
        if not args:
            raise DirectiveSyntaxException(f"wrong argument count for '{name}'", line=lineno)
        setattr(props, name, args[0] == "true")
    elif name == "max_age":
        if not args:
            raise DirectiveSyntaxException("wrong argument count for 'max_age'", line=lineno)
        try:
            props.max_age = int(args[0])
        except ValueError as exc:
            raise DirectiveSyntaxException(f"invalid max_age value: {args[0]!r}", line=lineno) from exc
    else:
        raise DirectiveSyntaxException(f"unrecognized subdirective {name}", line=lineno)


def parse_directive(text: str, props: CorsProperties | None = None) -> CorsProperties:
    """Parse ``cors`` directive text into :class:`CorsProperties`.

    When *props* is given it is updated in place and returned.

    Raises:
        DirectiveSyntaxException: On unknown directives or subdirectives,
            missing arguments, a non-integer ``max_age`` or an unclosed block.
    """
    props = props if props is not None else CorsProperties()
    in_block = False
    block_start = 0

    for lineno, tokens in _lines(text):
        if in_block:
            if tokens == ["}"]:
                in_block = False
                continue
            _apply_option(props, tokens[0], tokens[1:], lineno)
            continue

        if tokens[0] != DIRECTIVE_NAME:
            raise DirectiveSyntaxException(f"unrecognized directive {tokens[0]}", line=lineno)

        args = tokens[1:]
        if args[-2:] == ["{", "}"]:
            args = args[:-2]
        elif args and args[-1] == "{":
            args = args[:-1]
            in_block = True
            block_start = lineno
        for arg in args:
            if arg in ("{", "}"):
                raise DirectiveSyntaxException(f"unexpected '{arg}'", line=lineno)
        if args:
            props.allowed_origins = list(args)

    if in_block:
        raise DirectiveSyntaxException("unclosed block", line=block_start)
    return props


def parse_directive_file(path: str | Path) -> CorsProperties:
    """Read and parse a directive file."""
    return parse_directive(Path(path).read_text())
