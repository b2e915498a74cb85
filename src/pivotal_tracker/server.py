from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from pivotal_tracker.core.config import create_client_from_env, load_env_config
from pivotal_tracker.core.logging import setup_logging
from pivotal_tracker.core.registry import register_discovered_tools


def build_app() -> FastMCP:
    client = create_client_from_env()
    app = FastMCP("pivotal-tracker-mcp")
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


def main() -> None:
    setup_logging(load_env_config().log_level)
    build_app().run("stdio")


if __name__ == "__main__":
    main()
