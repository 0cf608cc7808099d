"""CLI interface for chatgpt-share-mcp."""

from __future__ import annotations

import json
import shutil
import sys

import click

from . import __version__
from .config import LOG_LEVEL, REQUEST_TIMEOUT


@click.group()
@click.version_option(version=__version__, prog_name="chatgpt-share-mcp")
def cli():
    """chatgpt-share-mcp: read shared ChatGPT conversations from Claude.

    Run it as an MCP server in Claude Desktop or Claude Code, or fetch a
    share link directly from the command line.
    """
    pass


@cli.command()
def serve():
    """Start the MCP server (stdio transport).

    This is used by Claude Desktop and Claude Code to communicate
    with chatgpt-share-mcp. You usually don't need to run this manually.
    """
    from .server import mcp

    mcp.run(transport="stdio")


@cli.command()
@click.argument("url")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "markdown", "text"]),
    default="markdown",
    show_default=True,
    help="Output format",
)
@click.option("--no-metadata", is_flag=True, help="Omit title and timestamps")
@click.option("--max-messages", type=click.IntRange(1, 1000), help="Maximum number of messages")
@click.option("--skip-messages", type=click.IntRange(min=0), help="Messages to skip from the start")
@click.option("--start-index", type=click.IntRange(min=0), help="First message index (0-based)")
@click.option("--end-index", type=click.IntRange(min=0), help="End message index (exclusive)")
def fetch(
    url: str,
    output_format: str,
    no_metadata: bool,
    max_messages: int | None,
    skip_messages: int | None,
    start_index: int | None,
    end_index: int | None,
):
    """Fetch a shared conversation and print it.

    Example:
        chatgpt-share-mcp fetch https://chatgpt.com/share/<conversation-id>
    """
    from .pipeline import fetch_conversation_text

    result = fetch_conversation_text(
        url,
        output_format=output_format,
        include_metadata=not no_metadata,
        max_messages=max_messages,
        skip_messages=skip_messages,
        start_index=start_index,
        end_index=end_index,
    )
    click.echo(result)
    if result.startswith("Error: "):
        sys.exit(1)


CONFIG_LOCATIONS = {
    "darwin": "~/Library/Application Support/Claude/claude_desktop_config.json",
    "win32": "%APPDATA%\\Claude\\claude_desktop_config.json",
}
DEFAULT_CONFIG_LOCATION = "~/.config/Claude/claude_desktop_config.json"


def server_env() -> dict[str, str]:
    """Current fetch settings, as the env vars the server reads at startup."""
    return {
        "CHATGPT_SHARE_MCP_TIMEOUT": f"{REQUEST_TIMEOUT:g}",
        "CHATGPT_SHARE_MCP_LOG_LEVEL": LOG_LEVEL,
    }


@cli.command()
def config():
    """Print the configuration snippet for Claude Desktop and Claude Code.

    The snippet carries the current CHATGPT_SHARE_MCP_* settings so the
    server launched by the client fetches pages the same way.
    """
    executable = shutil.which("chatgpt-share-mcp")
    if executable:
        command = [executable, "serve"]
    else:
        command = ["uvx", "chatgpt-share-mcp", "serve"]
    env = server_env()

    click.echo()
    click.echo(click.style("Claude Desktop", bold=True))
    click.echo("Add this to your Claude Desktop config file:")
    click.echo()
    server_config = {"command": command[0], "args": command[1:], "env": env}
    click.echo(json.dumps({"mcpServers": {"chatgpt-share-mcp": server_config}}, indent=2))
    click.echo()
    location = CONFIG_LOCATIONS.get(sys.platform, DEFAULT_CONFIG_LOCATION)
    click.echo(f"Config file location: {location}")

    click.echo()
    click.echo(click.style("Claude Code", bold=True))
    click.echo("Run this command:")
    click.echo()
    env_flags = " ".join(f"-e {key}={value}" for key, value in env.items())
    click.echo(f"  claude mcp add chatgpt-share-mcp {env_flags} -- {' '.join(command)}")
    click.echo()
