# -*- coding: utf-8 -*-
"""
SharePoint lists.

All list operations use the verbose OData format, so single entities come
back under 'd' and collections under 'd.results'.
"""

import json

from .containers import ListObject
from .exceptions import SharePointError
from .interfaces import ODATA_VERBOSE
from .mapper import to_datetime, to_int
from .utils import quote_odata

# List template types (SPListTemplateType)
TEMPLATE_GENERIC_LIST = 100
TEMPLATE_DOCUMENT_LIBRARY = 101

# Templates that hold files and folders
WRITABLE_TEMPLATES = {
    TEMPLATE_DOCUMENT_LIBRARY,
    109,  # Picture library
    119,  # Site pages library
    700,  # My Site document library
    851,  # Asset library
}


class SharePointList(ListObject):
    """SharePoint list (or document library)"""

    fields = {
        'sp_type': None,
        'guid': None,
        'title': None,
        'description': None,
        'template': to_int,
        'item_count': to_int,
        'item_type': None,
        'relative_url': None,
        'created': to_datetime,
        'modified': to_datetime,
    }

    mapping = {
        'sp_type': '__metadata.type',
        'guid': 'Id',
        'title': 'Title',
        'description': 'Description',
        'template': 'BaseTemplate',
        'item_count': 'ItemCount',
        'item_type': 'ListItemEntityTypeFullName',
        'relative_url': 'RootFolder.ServerRelativeUrl',
        'created': 'Created',
        'modified': 'LastItemModifiedDate',
    }

    @property
    def endpoint(self):
        """REST endpoint of this list"""
        return f"_api/web/Lists(guid'{self.guid}')"

    def get_list(self):
        return self

    def is_writable(self, raise_error=False):
        """
        Check if folder and file operations are allowed on this list.

        Args:
            raise_error (bool): Raise instead of returning False

        Raises:
            SharePointError: If the list is not writable and raise_error is set
        """
        writable = self.template in WRITABLE_TEMPLATES

        if not writable and raise_error:
            raise SharePointError(
                f"Folder/File operations are not allowed on a list template type [{self.template}]"
            )

        return writable

    @classmethod
    def get_all(cls, site, extra=None):
        """
        Get all lists of a site.

        Args:
            site (Site): SharePoint site
            extra (dict): Extra payload values to map

        Returns:
            dict: Lists keyed by GUID
        """
        payload = site.request('_api/web/Lists', {
            'headers': site.build_headers(),
            'query': {'$expand': 'RootFolder'},
        })

        lists = {}
        for data in payload['d']['results']:
            sp_list = cls(site, data, extra)
            lists[sp_list.guid] = sp_list

        return lists

    @classmethod
    def get_by_guid(cls, site, guid, extra=None):
        """Get a list by GUID."""
        payload = site.request(f"_api/web/Lists(guid'{guid}')", {
            'headers': site.build_headers(),
            'query': {'$expand': 'RootFolder'},
        })

        return cls(site, payload['d'], extra)

    @classmethod
    def get_by_title(cls, site, title, extra=None):
        """Get a list by title."""
        payload = site.request(f"_api/web/Lists/GetByTitle('{quote_odata(title)}')", {
            'headers': site.build_headers(),
            'query': {'$expand': 'RootFolder'},
        })

        return cls(site, payload['d'], extra)

    @classmethod
    def create(cls, site, title, template=TEMPLATE_GENERIC_LIST, description='', extra=None):
        """
        Create a list.

        Args:
            site (Site): SharePoint site
            title (str): List title
            template (int): List template type
            description (str): List description
            extra (dict): Extra payload values to map

        Returns:
            SharePointList: The new list
        """
        body = json.dumps({
            '__metadata': {'type': 'SP.List'},
            'AllowContentTypes': True,
            'BaseTemplate': template,
            'ContentTypesEnabled': True,
            'Description': description,
            'Title': title,
        })

        payload = site.request('_api/web/Lists', {
            'headers': site.build_headers(digest=True, extra={
                'Content-Type': ODATA_VERBOSE,
            }),
            'query': {'$expand': 'RootFolder'},
            'body': body,
        }, 'POST')

        return cls(site, payload['d'], extra)

    def update(self, properties):
        """
        Update list properties (Title, Description, ...).

        The API returns no body on a successful update, so the object is
        rehydrated from the properties that were sent.

        Returns:
            SharePointList: This list
        """
        properties = {**properties, '__metadata': {'type': 'SP.List'}}

        self.request(self.endpoint, {
            'headers': self.build_headers(digest=True, extra={
                'X-HTTP-Method': 'MERGE',
                'IF-MATCH': '*',
                'Content-Type': ODATA_VERBOSE,
            }),
            'body': json.dumps(properties),
        }, 'POST')

        return self.hydrate(properties)

    def delete(self):
        """Delete this list."""
        self.request(self.endpoint, {
            'headers': self.build_headers(digest=True, extra={
                'X-HTTP-Method': 'DELETE',
                'IF-MATCH': '*',
            }),
        }, 'POST')

        return True

    def get_items(self, top=5000, extra=None):
        """
        Load the items of this list into the container.

        Args:
            top (int): Maximum number of items (list view threshold by default)
            extra (dict): Extra item payload values to map

        Returns:
            dict: Items keyed by GUID
        """
        from .items import ListItem

        self.items = ListItem.get_all(self, top=top, extra=extra)
        return self.items

    def get_item(self, item_id, extra=None):
        """Get a list item by ID."""
        from .items import ListItem

        return ListItem.get_by_id(self, item_id, extra)

    def create_item(self, properties, extra=None):
        """Create a list item and add it to the container."""
        from .items import ListItem

        item = ListItem.create(self, properties, extra)
        self[item.guid] = item
        return item

    def get_folder(self, extra=None):
        """Get the root folder of this list."""
        from .folders import Folder

        return Folder.get_by_relative_url(self.site, self.relative_url, extra)
