"""chatgpt-share-mcp: read shared ChatGPT conversations from an MCP client."""

__version__ = "0.1.0"
