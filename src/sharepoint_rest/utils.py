# -*- coding: utf-8 -*-
"""
Shared utility functions for the SharePoint REST client.

This module provides debug flag helpers and URL helpers used across
multiple modules.
"""

import os
import posixpath
from urllib.parse import urlparse


def is_debug_metadata_enabled():
    """
    Check if debug metadata mode is enabled via DEBUG_METADATA environment variable.

    This is for detailed REST API debugging (response bodies, payload inspection).

    Returns:
        bool: True if debug metadata mode is enabled, False otherwise
    """
    return os.environ.get('DEBUG_METADATA', 'false').lower() == 'true'


def is_debug_enabled():
    """
    Check if general debug mode is enabled via DEBUG environment variable.

    This controls per-request messages and token/form digest lifecycle details.
    Error messages are always printed.

    Returns:
        bool: True if general debug mode is enabled, False otherwise
    """
    return os.environ.get('DEBUG', 'false').lower() == 'true'


def is_absolute_url(url):
    """
    Check that a string is a well formed absolute http(s) URL.

    Args:
        url (str): URL to check

    Returns:
        bool: True if the URL has an http/https scheme and a host
    """
    if not isinstance(url, str) or not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def get_hostname(url):
    """Return the hostname part of a URL (e.g. 'contoso.sharepoint.com')."""
    return urlparse(url).hostname


def join_relative_url(base, path=''):
    """
    Join a server relative URL with a child path.

    Args:
        base (str): Server relative URL (e.g. '/sites/team/Shared Documents')
        path (str): Child path to append (leading slashes are ignored)

    Returns:
        str: '<base>/<path>' with exactly one slash between both parts
    """
    return f"{(base or '').rstrip('/')}/{(path or '').lstrip('/')}"


def parent_relative_url(relative_url):
    """Return the parent server relative URL of a file or folder."""
    return posixpath.dirname(relative_url.rstrip('/'))


def quote_odata(value):
    """Escape a string literal for use inside an OData URL function call."""
    return str(value).replace("'", "''")
