"""Core client surface for pivotal-tracker (transport-agnostic)."""

from .client import API_URL, TOKEN_HEADER, PivotalTrackerClient
from .config import TrackerSettings, create_client_from_env, load_env_config
from .errors import (
    AuthenticationError,
    ConfigurationError,
    MissingElementError,
    PivotalTrackerError,
    ResponseParseError,
    TrackerApiError,
    TransportError,
)
from .forms import encode_form, flatten_form
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)
from .rest import RestClient, normalize_server_url
from .xmldoc import XmlElement, parse_xml

__all__ = [
    # Clients
    "PivotalTrackerClient",
    "RestClient",
    "API_URL",
    "TOKEN_HEADER",
    "normalize_server_url",
    # Exceptions
    "PivotalTrackerError",
    "ConfigurationError",
    "TransportError",
    "ResponseParseError",
    "MissingElementError",
    "AuthenticationError",
    "TrackerApiError",
    # Bodies and documents
    "encode_form",
    "flatten_form",
    "XmlElement",
    "parse_xml",
    # Config helpers
    "TrackerSettings",
    "create_client_from_env",
    "load_env_config",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
