"""Discover the local language server endpoint and read its quota data."""

from .endpoint_resolver import EndpointResolver
from .exceptions import (
    DiscoveryError,
    FetchFailed,
    MalformedResponse,
    NoCredentialFound,
    NoListeningPort,
    NoRespondingEndpoint,
    ProcessNotFound,
    QuotaProbeError,
)
from .models import PortCandidate, ProcessCandidate, ResolvedEndpoint

__all__ = [
    "DiscoveryError",
    "EndpointResolver",
    "FetchFailed",
    "MalformedResponse",
    "NoCredentialFound",
    "NoListeningPort",
    "NoRespondingEndpoint",
    "PortCandidate",
    "ProcessCandidate",
    "ProcessNotFound",
    "QuotaProbeError",
    "ResolvedEndpoint",
]
