# -*- coding: utf-8 -*-
"""
Capability interfaces shared by sites, lists, folders and items.

Entities never talk to the network directly: they issue requests through the
RequestIssuer they were built from (a Site, or a list/folder that forwards to
its Site).
"""

from abc import ABC, abstractmethod

ODATA_VERBOSE = 'application/json;odata=verbose'


class RequestIssuer(ABC):
    """Something that can send authenticated requests to a SharePoint site."""

    @abstractmethod
    def request(self, url, options=None, method='GET', json=True):
        """
        Send a request.

        Args:
            url (str): Absolute URL, or URL relative to the site
            options (dict): Optional 'headers', 'query' and 'body'
            method (str): HTTP method
            json (bool): Decode the response body as JSON

        Returns:
            dict: Decoded JSON body (json=True)
            requests.Response: Raw response (json=False)
        """

    @abstractmethod
    def get_access_token(self):
        """Return the AccessToken used as bearer credential."""

    @abstractmethod
    def get_form_digest(self):
        """Return the current form digest value for mutating requests."""

    @abstractmethod
    def get_site(self):
        """Return the Site requests are ultimately sent to."""

    def build_headers(self, accept=ODATA_VERBOSE, digest=False, extra=None):
        """
        Build the header map for a request.

        Args:
            accept (str): Accept header (None to omit it)
            digest (bool): Include the X-RequestDigest header
            extra (dict): Additional headers (e.g. X-HTTP-Method, IF-MATCH)

        Returns:
            dict: Header map including the bearer Authorization header
        """
        headers = {'Authorization': f"Bearer {self.get_access_token()}"}
        if accept:
            headers['Accept'] = accept
        if digest:
            headers['X-RequestDigest'] = str(self.get_form_digest())
        headers.update(extra or {})
        return headers


class FolderInterface(RequestIssuer):
    """A container of files and folders (a list root or a folder)."""

    @abstractmethod
    def get_relative_url(self, path=''):
        """Server relative URL of this container, optionally joined with a child path."""

    @abstractmethod
    def get_url(self, path=''):
        """Absolute URL of this container, optionally joined with a child path."""

    @abstractmethod
    def is_writable(self, raise_error=False):
        """Check if files and folders can be created in this container."""

    @abstractmethod
    def get_list(self):
        """Return the SharePointList this container belongs to."""


class ItemInterface(ABC):
    """An object that can be stored in a list or folder container, keyed by GUID."""

    guid = None
