# -*- coding: utf-8 -*-
"""
SharePoint REST client exception classes.

Every error raised by this package inherits from SharePointError so callers
can catch all of them with a single except clause. None of them are retried
by the library.
"""


class SharePointError(Exception):
    """Base exception for SharePoint REST operations."""


class ConfigError(SharePointError, ValueError):
    """
    Raised when a required configuration value is missing or invalid.

    The field attribute holds the name of the offending configuration key
    (e.g. 'secret', 'acs', 'client_id', 'resource').
    """

    def __init__(self, field, message=None):
        super().__init__(message or f"The {field} is empty/not set")
        self.field = field


class MappingError(SharePointError):
    """
    Raised by strict hydration when a mapped path is absent from the payload.

    The path attribute holds the unresolved path expression.
    """

    def __init__(self, path, message=None):
        super().__init__(message or f"Unable to resolve '{path}' in the payload")
        self.path = path


class AuthError(SharePointError):
    """
    Raised when authentication cannot proceed.

    This can occur when:
    - The context token signature is invalid or the token is malformed
    - The context token lacks a required claim
    - No access token is set, or the access token has expired
    - The identity platform refuses the client credentials
    """


class TransportError(SharePointError):
    """
    Raised when an HTTP request fails or returns a non-2xx status.

    The underlying requests exception (if any) is chained and also kept in the
    cause attribute. For HTTP errors, status_code and response are set.
    """

    def __init__(self, message, status_code=None, response=None, cause=None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.cause = cause
