"""Tool functions exposed by the MCP server; each takes the client first."""
