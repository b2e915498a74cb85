"""pivotal_tracker package exports."""

from .core import (
    API_URL,
    AuthenticationError,
    ConfigurationError,
    MissingElementError,
    PivotalTrackerClient,
    PivotalTrackerError,
    ResponseParseError,
    RestClient,
    TrackerApiError,
    TransportError,
    XmlElement,
    encode_form,
    parse_xml,
)

__all__ = [
    # Clients
    "PivotalTrackerClient",
    "RestClient",
    "API_URL",
    # Exceptions
    "PivotalTrackerError",
    "ConfigurationError",
    "TransportError",
    "ResponseParseError",
    "MissingElementError",
    "AuthenticationError",
    "TrackerApiError",
    # Helpers
    "XmlElement",
    "parse_xml",
    "encode_form",
]
