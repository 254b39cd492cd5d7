"""CLI entry point for the MCP Python reflection server."""

from __future__ import annotations

import logging
import sys

import click


@click.command()
@click.option(
    "--config", "-c",
    default=None,
    help="Path to YAML config file",
)
@click.option(
    "--mode", "-m",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=None,
    help="Transport mode: stdio, sse, or streamable-http (overrides config/env)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port for HTTP server (overrides config/env)",
)
@click.option(
    "--search-path", "-p",
    default=None,
    help="Extra import directories, separated by the OS path separator (overrides config/env)",
)
@click.option(
    "--ignore-access/--public-only",
    default=None,
    help="Default for tools called without ignore_access (overrides config/env)",
)
@click.option(
    "--max-members",
    type=int,
    default=None,
    help="Maximum members listed per section (overrides config/env)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=None,
    help="Enable debug logging (overrides config/env)",
)
def cli(
    config: str | None,
    mode: str | None,
    port: int | None,
    search_path: str | None,
    ignore_access: bool | None,
    max_members: int | None,
    verbose: bool | None,
) -> None:
    """MCP server for Python runtime reflection.

    Lets AI assistants resolve classes by dotted path and inspect their
    fields, methods and constructors in the server's interpreter.

    Configuration priority: YAML config < env vars (MCP_PYREFLECT_*) < CLI arguments.
    """
    from mcp_py_reflection.config import load_config

    # Build CLI overrides dict (None values are skipped by load_config)
    cli_overrides = {
        "server.mode": mode,
        "server.port": port,
        "server.verbose": verbose,
        "reflection.search_path": search_path,
        "reflection.ignore_access": ignore_access,
        "output.max_members": max_members,
    }

    app_config = load_config(config_path=config, cli_overrides=cli_overrides)

    log_level = logging.DEBUG if app_config.server.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if app_config.output.max_members < 1:
        click.echo("Error: output.max_members must be at least 1.", err=True)
        sys.exit(1)

    from mcp_py_reflection.server import create_server

    server = create_server(app_config)

    if app_config.server.mode == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=app_config.server.mode, port=app_config.server.port)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
