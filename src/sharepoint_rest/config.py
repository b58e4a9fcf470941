# -*- coding: utf-8 -*-
"""
Configuration management for the SharePoint REST client.

This module holds the site configuration used by the access token flows and
loads it from keyword arguments or environment variables (.env supported).
"""

import os

from dotenv import load_dotenv

from .exceptions import ConfigError
from .transport import DEFAULT_TIMEOUT
from .utils import is_absolute_url


class Config:
    """Configuration for a SharePoint site"""

    # Keys read from the environment, e.g. SHAREPOINT_URL, SHAREPOINT_SECRET
    ENV_KEYS = ('url', 'secret', 'acs', 'client_id', 'resource', 'tenant_id', 'login_endpoint', 'timeout')

    def __init__(self, url=None, secret=None, acs=None, client_id=None, resource=None,
                 tenant_id=None, login_endpoint=None, timeout=None):
        """
        Initialize configuration.

        Args:
            url (str): SharePoint site URL (e.g. 'https://contoso.sharepoint.com/sites/team')
            secret (str): App client secret (context token signing key and client credential)
            acs (str): Access Control Service token endpoint (app-only policy)
            client_id (str): App client ID (app-only policy)
            resource (str): Resource identifier (app-only policy),
                e.g. '00000003-0000-0ff1-ce00-000000000000/contoso.sharepoint.com@<realm>'
            tenant_id (str): Azure AD tenant ID (Azure AD policy)
            login_endpoint (str): Azure AD endpoint (default: login.microsoftonline.com)
            timeout (float): Request timeout in seconds (default: 30)
        """
        self.url = url
        self.secret = secret
        self.acs = acs
        self.client_id = client_id
        self.resource = resource
        self.tenant_id = tenant_id
        self.login_endpoint = login_endpoint or 'login.microsoftonline.com'
        self.timeout = float(timeout) if timeout is not None else DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, prefix='SHAREPOINT_', dotenv_path=None):
        """
        Build a configuration from environment variables.

        A .env file is loaded first (existing variables are not overridden).

        Args:
            prefix (str): Environment variable prefix
            dotenv_path (str): Explicit .env file path (default: search upwards)

        Returns:
            Config: Configuration with values from the environment
        """
        load_dotenv(dotenv_path)
        values = {}
        for key in cls.ENV_KEYS:
            value = os.environ.get(f"{prefix}{key.upper()}")
            if value:
                values[key] = value
        return cls(**values)

    @classmethod
    def from_mapping(cls, mapping):
        """Build a configuration from a dict, ignoring unknown keys."""
        return cls(**{key: mapping[key] for key in cls.ENV_KEYS if key in mapping})

    def get(self, key, default=None):
        """Dict style access to a configuration value."""
        value = getattr(self, key, None)
        return default if value is None else value

    def validate(self):
        """
        Validate the site URL.

        Token policy specific values are validated by the policy that needs them.

        Raises:
            ConfigError: If the site URL is missing or not an absolute http(s) URL
        """
        if not self.url:
            raise ConfigError('url', "The SharePoint Site URL is empty/not set")
        if not is_absolute_url(self.url):
            raise ConfigError('url', f"The SharePoint Site URL is invalid: {self.url}")
        if self.timeout <= 0:
            raise ConfigError('timeout', "timeout must be positive")
