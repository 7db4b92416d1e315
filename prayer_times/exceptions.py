"""
prayer_times/exceptions.py

Error taxonomy of the prayer-time resolver.

- ExternalFetchFailure: a provider could not deliver a schedule (network error,
  timeout, non-200 status, malformed body). Providers report it as a failed
  FetchResult, which the resolver logs.
- TimeParseFailure: a value is not a HH:MM wall-clock time.
- ValidationFailure: bad input to an admin operation. Subclasses DRF's
  ValidationError so views return a 400 keyed by the offending field.
"""
from rest_framework import serializers


class ExternalFetchFailure(Exception):
    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")


class TimeParseFailure(ValueError):
    pass


class ValidationFailure(serializers.ValidationError):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__({field: [message]})
