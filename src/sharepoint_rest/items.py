# -*- coding: utf-8 -*-
"""
SharePoint list items.
"""

import json

from .interfaces import ODATA_VERBOSE, ItemInterface
from .mapper import resolve, to_datetime, to_int
from .objects import SharePointObject


class ListItem(SharePointObject, ItemInterface):
    """Item of a SharePoint list"""

    id = 0

    fields = {
        'sp_type': None,
        'id': to_int,
        'guid': None,
        'title': None,
        'created': to_datetime,
        'modified': to_datetime,
    }

    mapping = {
        'sp_type': '__metadata.type',
        'id': 'Id',
        'guid': 'GUID',
        'title': 'Title',
        'created': 'Created',
        'modified': 'Modified',
    }

    def __init__(self, sp_list, payload, extra=None, strict=False):
        """
        Build a list item from a REST payload.

        Args:
            sp_list (SharePointList): Parent list
            payload (dict): Item payload (the 'd' object)
            extra (dict): Extra payload values to map (e.g. {'status': 'Status'})
            strict (bool): Fail when a mapped value is missing
        """
        self.sp_list = sp_list
        super().__init__(payload, extra, strict=strict)

    @property
    def endpoint(self):
        return f"{self.sp_list.endpoint}/items({self.id})"

    def get_list(self):
        return self.sp_list

    @classmethod
    def get_all(cls, sp_list, top=5000, extra=None):
        """
        Get the items of a list.

        Args:
            sp_list (SharePointList): SharePoint list
            top (int): Maximum number of items (list view threshold by default)
            extra (dict): Extra payload values to map

        Returns:
            dict: Items keyed by GUID
        """
        payload = sp_list.request(f"{sp_list.endpoint}/items", {
            'headers': sp_list.build_headers(),
            'query': {'$top': top},
        })

        items = {}
        for data in payload['d']['results']:
            item = cls(sp_list, data, extra)
            items[item.guid] = item

        return items

    @classmethod
    def get_by_id(cls, sp_list, item_id, extra=None):
        """Get a list item by ID."""
        payload = sp_list.request(f"{sp_list.endpoint}/items({int(item_id)})", {
            'headers': sp_list.build_headers(),
        })

        return cls(sp_list, payload['d'], extra)

    @classmethod
    def create(cls, sp_list, properties, extra=None):
        """
        Create a list item.

        Args:
            sp_list (SharePointList): SharePoint list
            properties (dict): Item properties (Title, ...)
            extra (dict): Extra payload values to map

        Returns:
            ListItem: The new item
        """
        body = json.dumps({**properties, '__metadata': {'type': sp_list.item_type}})

        payload = sp_list.request(f"{sp_list.endpoint}/items", {
            'headers': sp_list.build_headers(digest=True, extra={
                'Content-Type': ODATA_VERBOSE,
            }),
            'body': body,
        }, 'POST')

        return cls(sp_list, payload['d'], extra)

    def update(self, properties):
        """
        Update item properties.

        The API returns no body on a successful update, so the item is
        rehydrated from the properties that were sent.

        Returns:
            ListItem: This item
        """
        properties = {**properties, '__metadata': {'type': self.sp_type}}

        self.sp_list.request(self.endpoint, {
            'headers': self.sp_list.build_headers(digest=True, extra={
                'X-HTTP-Method': 'MERGE',
                'IF-MATCH': '*',
                'Content-Type': ODATA_VERBOSE,
            }),
            'body': json.dumps(properties),
        }, 'POST')

        return self.hydrate(properties)

    def recycle(self):
        """
        Move this item to the recycle bin.

        Returns:
            str: GUID of the recycle bin item
        """
        payload = self.sp_list.request(f"{self.endpoint}/recycle", {
            'headers': self.sp_list.build_headers(digest=True),
        }, 'POST')

        return resolve(payload, 'd.Recycle') or None

    def delete(self):
        """Delete this item."""
        self.sp_list.request(self.endpoint, {
            'headers': self.sp_list.build_headers(digest=True, extra={
                'X-HTTP-Method': 'DELETE',
                'IF-MATCH': '*',
            }),
        }, 'POST')

        return True
