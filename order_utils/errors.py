"""Exceptions raised while building and signing orders."""


class OrderUtilsError(Exception):
    """Base class for all order-utils errors."""


class ValidationError(OrderUtilsError):
    """Raised when order input is missing a field or has a malformed value."""


class SigningError(OrderUtilsError):
    """Raised when a signer cannot produce a signature."""


class ConfigError(OrderUtilsError):
    """Raised for unusable exchange configuration (e.g. unknown chain)."""
