"""Minimal outbound HTTP request client."""

from .networking import HttpClient, HttpClientConfig, ResponseRecord

__all__ = ["HttpClient", "HttpClientConfig", "ResponseRecord"]
