"""
Custom exceptions for the search sync service.
"""


from typing import List, Optional


class SyncException(Exception):
    """Base exception for all sync-related errors."""

    pass


class RetryableException(SyncException):
    """Exception that indicates the operation may succeed if attempted again."""

    pass


class NonRetryableException(SyncException):
    """Exception that indicates the operation should not be attempted again."""

    pass


class InvalidPayload(NonRetryableException):
    """Webhook body is malformed or carries no notifications."""

    pass


class SignatureException(NonRetryableException):
    """Webhook signature header is missing or does not match the body."""

    pass


class ConfigurationException(NonRetryableException):
    """Required secrets are not configured."""

    def __init__(self, missing: List[str]):
        super().__init__(f"{', '.join(missing)} environment variables are missing, please check the documentation")
        self.missing = missing


class UnresolvedItem(SyncException):
    """
    A content item could not be resolved from the Delivery API.

    Never escapes the graph resolver: it is attached to the empty graph so the
    caller can tell an unpublished item from an unreachable one.
    """

    def __init__(self, message: str, codename: str, language: str, transient: bool = False):
        super().__init__(message)
        self.codename = codename
        self.language = language
        self.transient = transient


class ItemNotFound(UnresolvedItem):
    """The item is not published (or was deleted) in the requested language."""

    def __init__(self, codename: str, language: str):
        super().__init__(f"Item '{codename}' not found in language '{language}'", codename, language)


class DeliveryFetchError(RetryableException):
    """Delivery API errors other than not-found (network, timeout, 5xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SearchIndexException(RetryableException):
    """Search index write errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
