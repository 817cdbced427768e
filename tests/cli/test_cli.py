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
"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from corsgate.cli.main import cli

DIRECTIVE = """
cors {
    allowed_origins ^https://.*\\.example\\.com$
    override_existing_cors true
    allowed_headers *
    max_age 100000
}
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "validate" in result.output
        assert "evaluate" in result.output


class TestValidateCommand:
    def test_valid_yaml(self, tmp_path: Path):
        path = _write(tmp_path, "corsgate.yaml", "corsgate:\n  cors:\n    max_age: 100000\n")

        result = CliRunner().invoke(cli, ["validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "86400" in result.output
        assert "Configuration is valid" in result.output

    def test_valid_directive(self, tmp_path: Path):
        path = _write(tmp_path, "Corsfile", DIRECTIVE)

        result = CliRunner().invoke(cli, ["validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "Configuration is valid" in result.output

    def test_comma_methods_rejected(self, tmp_path: Path):
        path = _write(tmp_path, "corsgate.yaml", 'corsgate:\n  cors:\n    allowed_methods: ["GET,POST"]\n')

        result = CliRunner().invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_directive_syntax_error(self, tmp_path: Path):
        path = _write(tmp_path, "Corsfile", "cors {\n    max_age soon\n}\n")

        result = CliRunner().invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "invalid max_age value" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 2


class TestEvaluateCommand:
    def test_preflight(self, tmp_path: Path):
        path = _write(tmp_path, "Corsfile", DIRECTIVE)

        result = CliRunner().invoke(
            cli,
            [
                "evaluate",
                str(path),
                "--origin",
                "https://api.example.com",
                "--method",
                "OPTIONS",
                "--request-method",
                "POST",
                "--request-headers",
                "X-Custom",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "preflight request" in result.output
        assert "Access-Control-Allow-Origin: https://api.example.com" in result.output
        assert "Access-Control-Allow-Headers: X-Custom" in result.output
        assert "Access-Control-Max-Age: 86400" in result.output

    def test_origin_not_allowed(self, tmp_path: Path):
        path = _write(tmp_path, "Corsfile", DIRECTIVE)

        result = CliRunner().invoke(cli, ["evaluate", str(path), "--origin", "https://example.org"])

        assert result.exit_code == 0
        assert "Origin not allowed" in result.output

    def test_override_disabled_notice(self, tmp_path: Path):
        path = _write(tmp_path, "corsgate.yaml", "corsgate:\n  cors:\n    allowed_origins: ['*']\n")

        result = CliRunner().invoke(cli, ["evaluate", str(path), "--origin", "http://example.com"])

        assert result.exit_code == 0
        assert "simple request" in result.output
        assert "no headers will be written" in result.output
        assert "Access-Control-Allow-Origin: http://example.com" in result.output
