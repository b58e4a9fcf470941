# -*- coding: utf-8 -*-
"""
SharePoint context information (form digest).
"""

from datetime import datetime, timezone

from .mapper import to_datetime
from .objects import SharePointObject


class ContextInfo(SharePointObject):
    """
    Result of POST _api/contextinfo.

    Holds the form digest that mutating requests send in the X-RequestDigest
    header. The digest lifetime ('FormDigestTimeoutSeconds') is converted to
    an absolute expiration when the object is built.
    """

    fields = {
        'library_version': None,
        'site_url': None,
        'web_url': None,
        'form_digest': None,
        'expiration': to_datetime,
    }

    mapping = {
        'library_version': 'd.GetContextWebInformation.LibraryVersion',
        'site_url': 'd.GetContextWebInformation.SiteFullUrl',
        'web_url': 'd.GetContextWebInformation.WebFullUrl',
        'form_digest': 'd.GetContextWebInformation.FormDigestValue',
        'expiration': 'd.GetContextWebInformation.FormDigestTimeoutSeconds',
    }

    lifetimes = ('expiration',)

    @classmethod
    def create(cls, site, extra=None):
        """
        Fetch the context information of a site.

        Args:
            site (Site): SharePoint site
            extra (dict): Extra payload values to map

        Returns:
            ContextInfo: Context information with a fresh form digest
        """
        payload = site.request('_api/contextinfo', {
            'headers': site.build_headers(),
        }, 'POST')

        return cls(payload, extra, strict=True)

    def get_form_digest(self):
        """Form digest value"""
        return self.form_digest

    def form_digest_has_expired(self, now=None):
        """Check if the form digest has expired."""
        now = to_datetime(now) if now is not None else datetime.now(timezone.utc)
        return self.expiration is None or now >= self.expiration

    def __str__(self):
        return self.form_digest or ''
