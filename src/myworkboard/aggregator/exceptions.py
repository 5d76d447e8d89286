"""Custom exceptions for the Work Aggregator."""


class AggregatorError(Exception):
    """Base exception for Work Aggregator errors."""


class MissingCredentialError(AggregatorError):
    """No usable credential is stored; raised before any network call."""
