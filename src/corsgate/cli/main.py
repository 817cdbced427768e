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
"""corsgate CLI: validate a CORS policy file and evaluate requests against it."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from corsgate.cli.console import console, print_headers
from corsgate.config.directive import parse_directive_file
from corsgate.config.properties import CorsProperties
from corsgate.core.config import Config
from corsgate.cors.headers import CorsHeaderWriter
from corsgate.cors.matcher import is_origin_allowed
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.preflight import is_preflight
from corsgate.cors.request import CorsRequest
from corsgate.kernel.exceptions import ConfigurationException
from corsgate.logging.structlog_adapter import StructlogAdapter

_CONFIG_SUFFIXES = (".yaml", ".yml", ".toml")


def load_policy(path: Path, log_level: str) -> CorsPolicy:
    """Load *path* as a YAML/TOML config or a ``cors`` directive file and build the policy."""
    if path.suffix in _CONFIG_SUFFIXES:
        config = Config.from_file(path)
        try:
            props = config.bind(CorsProperties)
        except ValueError as exc:
            raise ConfigurationException(str(exc)) from exc
    else:
        config = Config({})
        props = parse_directive_file(path)

    StructlogAdapter().configure_levels(log_level, str(config.get("corsgate.logging.format", "console")))
    return CorsPolicy.from_properties(props)


def _load_or_exit(path: Path, log_level: str) -> CorsPolicy:
    try:
        return load_policy(path, log_level)
    except ConfigurationException as exc:
        console.print(f"[error]Invalid configuration:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None


@click.group()
@click.version_option(package_name="corsgate")
@click.option("--log-level", default="WARNING", show_default=True, help="Root log level.")
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """corsgate — CORS policy tooling."""
    ctx.obj = {"log_level": log_level.upper()}


@cli.command("validate")
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate_command(ctx: click.Context, config_path: Path) -> None:
    """Validate CONFIG_PATH and print the effective policy."""
    policy = _load_or_exit(config_path, ctx.obj["log_level"])

    table = Table(title="Effective CORS policy", show_header=False, border_style="dim")
    table.add_column("Option", style="option")
    table.add_column("Value")
    table.add_row("allowed_origins", escape(" ".join(policy.origin_texts)))
    table.add_row("override_existing_cors", str(policy.override_existing_cors).lower())
    table.add_row("allowed_methods", escape(", ".join(policy.allowed_methods)))
    table.add_row("allow_credentials", str(policy.allow_credentials).lower())
    table.add_row("max_age", str(policy.max_age))
    table.add_row("allowed_headers", escape(", ".join(policy.allowed_headers)))
    table.add_row("exposed_headers", escape(", ".join(policy.exposed_headers)))

    console.print(table)
    console.print("[allowed]Configuration is valid[/allowed]")


@cli.command("evaluate")
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--origin", required=True, help="Value of the Origin request header.")
@click.option("--method", default="GET", show_default=True, help="Request method.")
@click.option("--request-method", default="", help="Value of Access-Control-Request-Method.")
@click.option("--request-headers", default="", help="Value of Access-Control-Request-Headers.")
@click.pass_context
def evaluate_command(
    ctx: click.Context,
    config_path: Path,
    origin: str,
    method: str,
    request_method: str,
    request_headers: str,
) -> None:
    """Show what the policy in CONFIG_PATH decides for one request."""
    policy = _load_or_exit(config_path, ctx.obj["log_level"])
    request = CorsRequest(
        method=method.upper(),
        origin=origin,
        request_method=request_method,
        request_headers=request_headers,
    )

    if not is_origin_allowed(policy, origin):
        console.print(f"[denied]Origin not allowed:[/denied] {escape(origin)}")
        return

    kind = "preflight" if is_preflight(request) else "simple"
    console.print(f"[allowed]Origin allowed[/allowed] ({kind} request)")
    if not policy.override_existing_cors:
        console.print("[muted]override_existing_cors is false: no headers will be written[/muted]")

    print_headers(CorsHeaderWriter(policy).plan(request))


def main() -> None:
    cli()
