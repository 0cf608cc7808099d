"""Tests for the CLI module."""

import json

from click.testing import CliRunner

import chatgpt_share_mcp.cli as cli_module
from chatgpt_share_mcp import __version__, pipeline
from chatgpt_share_mcp.cli import cli


def test_version_command() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_fetch_invalid_url_exits_nonzero() -> None:
    result = CliRunner().invoke(cli, ["fetch", "https://example.com/not-a-share"])
    assert result.exit_code == 1
    assert "Error: Invalid ChatGPT shared conversation URL." in result.output


def test_fetch_passes_options(monkeypatch) -> None:
    seen = {}

    def fake_fetch(url, **kwargs):
        seen["url"] = url
        seen.update(kwargs)
        return "## User\n\nhello\n"

    monkeypatch.setattr(pipeline, "fetch_conversation_text", fake_fetch)
    result = CliRunner().invoke(
        cli,
        [
            "fetch",
            "https://chatgpt.com/share/abc",
            "--format",
            "text",
            "--no-metadata",
            "--skip-messages",
            "2",
            "--max-messages",
            "3",
        ],
    )

    assert result.exit_code == 0
    assert "hello" in result.output
    assert seen["output_format"] == "text"
    assert seen["include_metadata"] is False
    assert seen["skip_messages"] == 2
    assert seen["max_messages"] == 3
    assert seen["start_index"] is None


def test_fetch_rejects_out_of_range_max() -> None:
    result = CliRunner().invoke(cli, ["fetch", "https://chatgpt.com/share/abc", "--max-messages", "0"])
    assert result.exit_code != 0


def test_config_prints_mcp_snippet() -> None:
    result = CliRunner().invoke(cli, ["config"])
    assert result.exit_code == 0
    assert '"mcpServers"' in result.output
    assert "claude mcp add chatgpt-share-mcp" in result.output


def test_config_carries_server_settings(monkeypatch) -> None:
    """The snippet forwards the fetch settings to the launched server."""
    monkeypatch.setattr(cli_module, "REQUEST_TIMEOUT", 25.0)
    monkeypatch.setattr(cli_module, "LOG_LEVEL", "INFO")
    monkeypatch.setattr(cli_module.shutil, "which", lambda name: None)

    result = CliRunner().invoke(cli, ["config"])
    snippet = result.output[result.output.index("{") : result.output.rindex("}") + 1]
    server = json.loads(snippet)["mcpServers"]["chatgpt-share-mcp"]

    assert server["command"] == "uvx"
    assert server["args"] == ["chatgpt-share-mcp", "serve"]
    assert server["env"] == {
        "CHATGPT_SHARE_MCP_TIMEOUT": "25",
        "CHATGPT_SHARE_MCP_LOG_LEVEL": "INFO",
    }
    assert (
        "claude mcp add chatgpt-share-mcp -e CHATGPT_SHARE_MCP_TIMEOUT=25 "
        "-e CHATGPT_SHARE_MCP_LOG_LEVEL=INFO -- uvx chatgpt-share-mcp serve"
    ) in result.output
