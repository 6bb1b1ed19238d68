"""Local validation run before requests are sent."""

from .match_client import is_valid_match_client, validate_match_client

__all__ = ["is_valid_match_client", "validate_match_client"]
