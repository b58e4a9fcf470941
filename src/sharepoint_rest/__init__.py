# -*- coding: utf-8 -*-
"""
SharePoint REST Client Package
==============================

This package maps the SharePoint REST API (sites, lists, items, folders and
files) onto Python objects, and handles access token acquisition for
provider hosted add-ins and app-only integrations.

Modules:
--------
- config: Site configuration (keyword arguments or environment)
- token: Access tokens (user-only, app-only and Azure AD policies)
- site: SharePoint site (requests, access token, form digest)
- mapper: Payload path resolution and object hydration
- lists / items / folders / files: SharePoint entities and their CRUD operations
- transport: HTTP requests and error wrapping
- exceptions: Error hierarchy
- utils: Shared utility functions

Usage Example:
-------------
    from sharepoint_rest import Site

    site = Site({
        'url': 'https://contoso.sharepoint.com/sites/team',
        'acs': 'https://accounts.accesscontrol.windows.net/<realm>/tokens/OAuth/2',
        'client_id': '<client id>@<realm>',
        'secret': '<client secret>',
        'resource': '00000003-0000-0ff1-ce00-000000000000/contoso.sharepoint.com@<realm>',
    })
    site.create_access_token()

    documents = site.get_list('Documents')
    folder = documents.get_folder()
    folder.upload(b'hello', name='hello.txt', overwrite=True)
"""

__version__ = "1.0.0"

from .config import Config
from .context_info import ContextInfo
from .exceptions import AuthError, ConfigError, MappingError, SharePointError, TransportError
from .files import CHECKIN_MAJOR, CHECKIN_MINOR, CHECKIN_OVERWRITE, File
from .folders import Folder, is_system_folder
from .interfaces import FolderInterface, ItemInterface, RequestIssuer
from .items import ListItem
from .lists import SharePointList
from .mapper import ABSENT, hydrate, merge_mappings, resolve
from .site import Site
from .token import AccessToken
from .utils import is_debug_enabled, is_debug_metadata_enabled

__all__ = [
    # Configuration
    'Config',
    # Authentication
    'AccessToken',
    'ContextInfo',
    # Site and entities
    'Site',
    'SharePointList',
    'ListItem',
    'Folder',
    'File',
    'is_system_folder',
    'CHECKIN_MINOR',
    'CHECKIN_MAJOR',
    'CHECKIN_OVERWRITE',
    # Interfaces
    'RequestIssuer',
    'FolderInterface',
    'ItemInterface',
    # Mapping
    'ABSENT',
    'resolve',
    'hydrate',
    'merge_mappings',
    # Errors
    'SharePointError',
    'ConfigError',
    'MappingError',
    'AuthError',
    'TransportError',
    # Utilities
    'is_debug_enabled',
    'is_debug_metadata_enabled',
]
