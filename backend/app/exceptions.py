"""
Errors raised while talking to the upstream employee service.

The API layer maps these to HTTP statuses in app.main:
  RateLimitExceededError -> 429
  UpstreamServiceError   -> 500
"""


class RateLimitExceededError(Exception):
    """The upstream service answered with HTTP 429 Too Many Requests."""


class UpstreamServiceError(Exception):
    """Any other upstream failure: bad status, network error, malformed payload."""
