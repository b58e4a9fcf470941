# -*- coding: utf-8 -*-
"""
SharePoint site.

The Site is the single point where requests leave the library. It owns the
configuration, the requests session, the access token and the context
information (form digest). Lists, folders, files and items hold a reference
to it and issue their requests through it.
"""

from urllib.parse import urlparse

from .config import Config
from .context_info import ContextInfo
from .exceptions import AuthError
from .interfaces import RequestIssuer
from .token import AccessToken
from .transport import create_session, decode_json, send_request
from .utils import is_absolute_url, is_debug_enabled, join_relative_url


class Site(RequestIssuer):
    """SharePoint site bound to a configuration and an HTTP session"""

    def __init__(self, config, session=None, access_token=None):
        """
        Initialize a site.

        Args:
            config (Config | dict): Site configuration ('url' is required)
            session (requests.Session): HTTP session (default: a new session)
            access_token (AccessToken): Previously obtained access token

        Raises:
            ConfigError: If the site URL is missing or invalid
        """
        if not isinstance(config, Config):
            config = Config.from_mapping(config)
        config.validate()

        self.config = config
        self.url = config.url.rstrip('/')
        self.session = session or create_session()
        self.access_token = access_token
        self.context_info = None

    @classmethod
    def from_env(cls, prefix='SHAREPOINT_', session=None):
        """Build a site from environment variables (see Config.from_env)."""
        return cls(Config.from_env(prefix), session=session)

    def __repr__(self):
        return f"<Site {self.url!r}>"

    def get_config(self):
        """Site configuration"""
        return self.config

    def get_site(self):
        return self

    def get_url(self, path=''):
        """
        Get the site URL, optionally joined with a path.

        Args:
            path (str): Path relative to the site

        Returns:
            str: Absolute URL
        """
        if not path:
            return self.url
        return join_relative_url(self.url, path)

    def get_hostname(self, path=''):
        """
        Get the scheme and host of the site, optionally joined with a server relative path.

        Example:
            site.get_hostname('/sites/team/Docs')  # 'https://contoso.sharepoint.com/sites/team/Docs'
        """
        parsed = urlparse(self.url)
        origin = f"{parsed.scheme}://{parsed.netloc}"
        if not path:
            return origin
        return join_relative_url(origin, path)

    def get_relative_url(self, path=''):
        """Server relative URL of the site, optionally joined with a path."""
        return join_relative_url(urlparse(self.url).path, path)

    def request(self, url, options=None, method='GET', json=True):
        """
        Send a request to the SharePoint site.

        Args:
            url (str): Absolute URL, or URL relative to the site (e.g. '_api/web/Lists')
            options (dict): Optional 'headers', 'query' and 'body'
            method (str): HTTP method
            json (bool): Decode the response body as JSON

        Returns:
            dict: Decoded JSON body (json=True)
            requests.Response: Raw response (json=False)

        Raises:
            TransportError: On any transport failure or non-2xx response
        """
        options = options or {}
        if not is_absolute_url(url):
            url = self.get_url(url)

        response = send_request(
            self.session,
            url,
            method=method,
            headers=options.get('headers'),
            params=options.get('query'),
            body=options.get('body'),
            timeout=self.config.timeout,
        )

        if json:
            return decode_json(response)
        return response

    def set_access_token(self, access_token):
        """
        Set the access token used by every subsequent request.

        Raises:
            AuthError: If the access token has expired
        """
        if access_token.has_expired():
            raise AuthError("The SharePoint Access Token has expired")
        self.access_token = access_token
        return self

    def get_access_token(self):
        """
        Get the current access token.

        Raises:
            AuthError: If no access token is set, or it has expired
        """
        if self.access_token is None:
            raise AuthError("Invalid SharePoint Access Token")
        if self.access_token.has_expired():
            raise AuthError("The SharePoint Access Token has expired")
        return self.access_token

    def create_access_token(self, context_token=None, extra=None):
        """
        Create an access token and set it on the site.

        Uses the user-only policy when a context token is given, otherwise the
        app-only policy.

        Args:
            context_token (str): Context token posted by SharePoint
            extra (dict): Extra payload values to map

        Returns:
            AccessToken: The new access token
        """
        if context_token:
            access_token = AccessToken.create_user_only_policy(self, context_token, extra)
        else:
            access_token = AccessToken.create_app_only_policy(self, extra)

        if is_debug_enabled():
            print(f"[✓] Access token acquired (expires {access_token.expiration.isoformat()})")

        self.access_token = access_token
        return access_token

    def get_context_info(self):
        """
        Get the context information, fetching it when missing or expired.

        Returns:
            ContextInfo: Context information with a valid form digest
        """
        if self.context_info is None or self.context_info.form_digest_has_expired():
            if is_debug_enabled():
                print("[DEBUG] Requesting a new form digest")
            self.context_info = ContextInfo.create(self)
        return self.context_info

    def get_form_digest(self):
        return self.get_context_info().get_form_digest()

    def get_lists(self, extra=None):
        """Get all lists of the site, keyed by GUID."""
        from .lists import SharePointList
        return SharePointList.get_all(self, extra)

    def get_list(self, title, extra=None):
        """Get a list by title."""
        from .lists import SharePointList
        return SharePointList.get_by_title(self, title, extra)

    def get_folder(self, relative_url, extra=None):
        """Get a folder by server relative URL."""
        from .folders import Folder
        return Folder.get_by_relative_url(self, relative_url, extra)

    def get_file(self, relative_url, extra=None):
        """Get a file by server relative URL."""
        from .files import File
        return File.get_by_relative_url(self, relative_url, extra)
