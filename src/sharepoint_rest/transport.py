# -*- coding: utf-8 -*-
"""
Transport layer for SharePoint REST calls.

This module sends exactly one blocking request per call. There is no retry
logic: every failure is wrapped in a TransportError and raised to the caller.
"""

import requests

from .exceptions import TransportError
from .utils import is_debug_enabled, is_debug_metadata_enabled

DEFAULT_TIMEOUT = 30


def create_session():
    """Create the requests session used by a Site."""
    session = requests.Session()
    session.headers.update({'User-Agent': 'sharepoint-rest'})
    return session


def send_request(session, url, method='GET', headers=None, params=None, body=None, timeout=DEFAULT_TIMEOUT):
    """
    Send a single request to the SharePoint REST API.

    Args:
        session (requests.Session): Session to send the request with
        url (str): Absolute request URL
        method (str): HTTP method ('GET', 'POST', ...)
        headers (dict): Request headers including Authorization
        params (dict): Query string parameters
        body (str | bytes | dict): Request body; dicts are form encoded by requests
        timeout (float): Request timeout in seconds

    Returns:
        requests.Response: The HTTP response (2xx only)

    Raises:
        TransportError: On connection problems, timeouts or a non-2xx status.
            The underlying requests exception is chained.
    """
    method = method.upper()

    if is_debug_enabled():
        print(f"[DEBUG] {method} {url}")
        if params:
            print(f"[DEBUG] Query: {params}")

    try:
        response = session.request(method, url, headers=headers, params=params, data=body, timeout=timeout)

    except requests.exceptions.Timeout as e:
        print(f"[!] Request timeout: {method} {url[:100]}")
        raise TransportError(f"Request timed out: {method} {url}", cause=e) from e

    except requests.exceptions.SSLError as e:
        print(f"[!] SSL/TLS certificate error: {str(e)[:200]}")
        raise TransportError(f"SSL certificate verification failed: {str(e)[:200]}", cause=e) from e

    except requests.exceptions.ConnectionError as e:
        print(f"[!] Network connection error: {str(e)[:200]}")
        raise TransportError(f"Network connection failed: {str(e)[:200]}", cause=e) from e

    except requests.exceptions.RequestException as e:
        print(f"[!] HTTP request error: {str(e)[:200]}")
        raise TransportError(f"HTTP request failed: {str(e)[:200]}", cause=e) from e

    if is_debug_metadata_enabled():
        print(f"[DEBUG] Response {response.status_code}: {response.text[:300]}")

    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        print(f"[!] {method} {url[:100]} failed with status {response.status_code}")
        if is_debug_enabled():
            print(f"[DEBUG] {response.text[:500]}")
        raise TransportError(
            f"SharePoint request failed: {response.status_code} - {response.text[:200]}",
            status_code=response.status_code,
            response=response,
            cause=e,
        ) from e

    return response


def decode_json(response):
    """
    Decode a response body as JSON.

    Returns:
        dict: The decoded body, or an empty dict when the body is empty
            (e.g. MERGE/DELETE responses)

    Raises:
        TransportError: If the body is not valid JSON
    """
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            f"Invalid JSON in response: {response.text[:200]}",
            status_code=response.status_code,
            response=response,
            cause=e,
        ) from e
