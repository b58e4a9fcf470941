# -*- coding: utf-8 -*-
"""
SharePoint access tokens.

This module provides the AccessToken value object and the flows used to
obtain one:

- User-only policy: exchange the refresh token carried by a signed context
  token (the JWT SharePoint posts to a provider hosted add-in)
- App-only policy: OAuth 2.0 client credentials against the Access Control
  Service (ACS) token endpoint
- Azure AD policy: OAuth 2.0 client credentials through MSAL

There is no automatic renewal. Once has_expired() returns True the caller has
to run one of the flows again.
"""

import json
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

import jwt
import msal
import requests

from .exceptions import AuthError, ConfigError, TransportError
from .mapper import to_datetime
from .objects import SharePointObject
from .utils import get_hostname, is_absolute_url, is_debug_enabled

FORM_HEADERS = {'Content-Type': 'application/x-www-form-urlencoded'}


def build_resource(sender, hostname):
    """
    Build the resource identifier for the user-only policy.

    The site hostname is inserted in the context token sender claim at the
    '@' delimiter:

        build_resource('app@tenant', 'contoso.sharepoint.com')
        # 'app/contoso.sharepoint.com@tenant'
    """
    return sender.replace('@', f"/{hostname}@", 1)


def timezone_name(moment):
    """Name of the timezone of an aware datetime ('UTC', 'Europe/Lisbon', '+01:00')."""
    key = getattr(moment.tzinfo, 'key', None)
    if key:
        return key
    offset = moment.utcoffset()
    if not offset:
        return 'UTC'
    sign = '-' if offset < timedelta(0) else '+'
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def timezone_from_name(name):
    """Inverse of timezone_name()."""
    if name == 'UTC':
        return timezone.utc
    if name[:1] in ('+', '-'):
        hours, minutes = name[1:].split(':')
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-offset if name[0] == '-' else offset)
    return ZoneInfo(name)


class AccessToken(SharePointObject):
    """
    Bearer token with an absolute expiration.

    The payload's 'expires_on' value is a lifetime in seconds. It is turned
    into an absolute expiration when the token is built and never recomputed.
    Tokens are immutable once built and can be shared read-only.
    """

    fields = {
        'value': None,
        'expiration': to_datetime,
    }

    mapping = {
        'value': 'access_token',
        'expiration': 'expires_on',
    }

    lifetimes = ('expiration',)

    def __init__(self, payload, extra=None, now=None):
        """
        Build an access token from a token endpoint payload.

        Args:
            payload (dict): Token endpoint response ('access_token', 'expires_on', ...)
            extra (dict): Extra payload values to map
            now (datetime): Construction instant (default: current time)

        Raises:
            MappingError: If a mapped value is missing from the payload
        """
        super().__init__(payload, extra, strict=True, now=now)
        self._sealed = True

    def __setattr__(self, name, value):
        if getattr(self, '_sealed', False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __str__(self):
        return self.value

    def __repr__(self):
        return f"<AccessToken expires {self.expiration.isoformat()}>"

    def __eq__(self, other):
        if not isinstance(other, AccessToken):
            return NotImplemented
        return self.value == other.value and self.expiration == other.expiration

    def __hash__(self):
        return hash((self.value, self.expiration))

    def __reduce__(self):
        return (_restore, (self.serialize(),))

    def to_dict(self):
        return {
            'value': self.value,
            'expiration': self.expiration,
            'extra': dict(self.extra),
        }

    def has_expired(self, now=None):
        """
        Check if the access token has expired.

        Args:
            now (datetime): Evaluation instant (default: current time)

        Returns:
            bool: True once the evaluation instant reaches the expiration
        """
        now = to_datetime(now) if now is not None else datetime.now(timezone.utc)
        return now >= self.expiration

    def serialize(self):
        """
        Serialize the token value and its absolute expiration.

        Returns:
            str: JSON array [value, epoch_timestamp, timezone_name]
        """
        timestamp = self.expiration.timestamp()
        if timestamp.is_integer():
            timestamp = int(timestamp)
        return json.dumps([self.value, timestamp, timezone_name(self.expiration)])

    @classmethod
    def deserialize(cls, data):
        """
        Recreate a token from serialize() output.

        Args:
            data (str | list | tuple): JSON array or the decoded triple

        Returns:
            AccessToken: Token with the same value and expiration instant
        """
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        value, timestamp, name = data
        expiration = datetime.fromtimestamp(timestamp, timezone_from_name(name))

        token = cls.__new__(cls)
        token.extra = {}
        token.mapper = dict(cls.mapping)
        token.value = value
        token.expiration = expiration
        token._sealed = True
        return token

    @classmethod
    def create_user_only_policy(cls, site, context_token, extra=None):
        """
        Create an access token (user-only policy).

        Args:
            site (Site): SharePoint site
            context_token (str): Context token (HS256 JWT signed with the app secret)
            extra (dict): Extra payload values to map

        Returns:
            AccessToken: The new access token

        Raises:
            ConfigError: If the secret is missing
            AuthError: If the context token cannot be verified or lacks a claim
            TransportError: If the token exchange fails
        """
        config = site.get_config()
        secret = config.get('secret')

        if not secret:
            raise ConfigError('secret', "The Secret is empty/not set")

        try:
            claims = jwt.decode(
                context_token,
                secret,
                algorithms=['HS256'],
                options={'verify_aud': False},
            )
        except jwt.PyJWTError as e:
            print(f"[!] Unable to decode the Context Token: {e}")
            raise AuthError("Unable to decode the Context Token") from e

        try:
            sender = claims['appctxsender']
            client_id = claims['aud']
            refresh_token = claims['refreshtoken']
            token_service_uri = json.loads(claims['appctx'])['SecurityTokenServiceUri']
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError(f"Invalid Context Token claims: {e}") from e

        if not isinstance(sender, str) or '@' not in sender:
            raise AuthError("Invalid Context Token claims: appctxsender")

        if not is_absolute_url(token_service_uri):
            raise AuthError("Invalid Context Token claims: SecurityTokenServiceUri")

        resource = build_resource(sender, get_hostname(site.get_url()))

        if is_debug_enabled():
            print(f"[DEBUG] Exchanging refresh token for resource {resource}")

        payload = site.request(token_service_uri, {
            'headers': dict(FORM_HEADERS),
            # The POST body must be form encoded
            'body': urlencode({
                'grant_type': 'refresh_token',
                'client_id': client_id,
                'client_secret': secret,
                'refresh_token': refresh_token,
                'resource': resource,
            }),
        }, 'POST')

        return cls(payload, extra)

    @classmethod
    def create_app_only_policy(cls, site, extra=None):
        """
        Create an access token (app-only policy).

        Configuration is validated in this order: secret, acs (presence),
        acs (absolute URL), client_id, resource.

        Args:
            site (Site): SharePoint site
            extra (dict): Extra payload values to map

        Returns:
            AccessToken: The new access token

        Raises:
            ConfigError: Naming the first missing or invalid configuration value
            TransportError: If the token exchange fails
        """
        config = site.get_config()

        if not config.get('secret'):
            raise ConfigError('secret', "The Secret is empty/not set")

        if not config.get('acs'):
            raise ConfigError('acs', "The Azure Access Control Service URL is empty/not set")

        if not is_absolute_url(config.get('acs')):
            raise ConfigError('acs', "The Azure Access Control Service URL is invalid")

        if not config.get('client_id'):
            raise ConfigError('client_id', "The Client ID is empty/not set")

        if not config.get('resource'):
            raise ConfigError('resource', "The Resource is empty/not set")

        payload = site.request(config.get('acs'), {
            'headers': dict(FORM_HEADERS),
            'body': urlencode({
                'grant_type': 'client_credentials',
                'client_id': config.get('client_id'),
                'client_secret': config.get('secret'),
                'resource': config.get('resource'),
            }),
        }, 'POST')

        return cls(payload, extra)

    @classmethod
    def create_azure_ad_policy(cls, site, extra=None):
        """
        Create an access token through Azure AD using MSAL.

        Uses the client credentials flow against
        https://<login_endpoint>/<tenant_id> with the '/.default' scope of the
        site host.

        Args:
            site (Site): SharePoint site
            extra (dict): Extra payload values to map

        Returns:
            AccessToken: The new access token

        Raises:
            ConfigError: If secret, client_id or tenant_id is missing
            AuthError: If Azure AD refuses the credentials
            TransportError: If the identity platform cannot be reached
        """
        config = site.get_config()

        for field in ('secret', 'client_id', 'tenant_id'):
            if not config.get(field):
                raise ConfigError(field)

        authority_url = f"https://{config.get('login_endpoint')}/{config.get('tenant_id')}"
        scope = f"https://{get_hostname(site.get_url())}/.default"

        try:
            app = msal.ConfidentialClientApplication(
                config.get('client_id'),
                client_credential=config.get('secret'),
                authority=authority_url,
            )
            result = app.acquire_token_for_client(scopes=[scope])
        except requests.exceptions.RequestException as e:
            print(f"[!] Unable to reach the identity platform: {str(e)[:200]}")
            raise TransportError(f"Azure AD request failed: {str(e)[:200]}", cause=e) from e
        except ValueError as e:
            raise ConfigError('tenant_id', f"Invalid authority {authority_url}: {e}") from e

        if 'access_token' not in result:
            error_msg = result.get('error', 'unknown_error')
            error_desc = result.get('error_description', 'No description provided')

            print("[!] AUTHENTICATION FAILED")
            if 'invalid_client' in error_msg:
                print("[!] Verify the client ID and secret, and that the secret has not expired")
            elif 'unauthorized_client' in error_msg:
                print("[!] Verify the app registration has SharePoint permissions with admin consent")
            print(f"[!] Technical details: {error_desc}")

            raise AuthError(f"Authentication failed: {error_msg} - {error_desc}")

        payload = dict(result)
        payload['expires_on'] = result.get('expires_in', 0)

        return cls(payload, extra)


def _restore(data):
    return AccessToken.deserialize(data)
