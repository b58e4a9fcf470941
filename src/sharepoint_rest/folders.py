# -*- coding: utf-8 -*-
"""
SharePoint folders.
"""

import json
import posixpath

from .containers import ListObject
from .exceptions import SharePointError
from .interfaces import ODATA_VERBOSE, ItemInterface
from .mapper import resolve, to_datetime, to_int
from .utils import parent_relative_url, quote_odata

# Folders SharePoint keeps for itself (list forms, ...)
SYSTEM_FOLDERS = ('forms',)

FOLDER_EXPAND = 'ListItemAllFields/ParentList,Properties'


def is_system_folder(name):
    """
    Check if a name (or relative URL) matches a SharePoint system folder.

    Example:
        is_system_folder('/sites/team/Shared Documents/Forms')  # True
    """
    return posixpath.basename(name.rstrip('/')).lower() in SYSTEM_FOLDERS


class Folder(ListObject, ItemInterface):
    """Folder of a SharePoint document library"""

    fields = {
        'sp_type': None,
        'guid': None,
        'title': None,
        'name': None,
        'relative_url': None,
        'item_count': to_int,
        'list_guid': None,
        'list_title': None,
        'created': to_datetime,
        'modified': to_datetime,
    }

    mapping = {
        'sp_type': '__metadata.type',
        'guid': 'UniqueId',
        'title': 'Name',
        'name': 'Name',
        'relative_url': 'ServerRelativeUrl',
        'item_count': 'ItemCount',
        # only available in sub folders
        'list_guid': 'ListItemAllFields.ParentList.Id',
        # only available in root folders
        'list_title': 'Properties.vti_x005f_listtitle',
        'created': 'TimeCreated',
        'modified': 'TimeLastModified',
    }

    def __init__(self, site, payload, extra=None, fetch=False, strict=False):
        """
        Build a folder from a REST payload.

        Args:
            site (Site): SharePoint site
            payload (dict): Folder payload (the 'd' object)
            extra (dict): Extra payload values to map
            fetch (bool): Load sub folders and files right away
            strict (bool): Fail when a mapped value is missing
        """
        super().__init__(site, payload, extra, strict=strict)

        if fetch and self.item_count:
            self.get_items()

    @property
    def endpoint(self):
        return f"_api/web/GetFolderByServerRelativeUrl('{quote_odata(self.relative_url)}')"

    def is_writable(self, raise_error=False):
        return True

    def get_list(self, extra=None):
        """
        Get the list this folder belongs to.

        Sub folders know their parent list GUID, root folders only know the
        list title.
        """
        from .lists import SharePointList

        if self.list_guid:
            return SharePointList.get_by_guid(self.site, self.list_guid, extra)

        return SharePointList.get_by_title(self.site, self.list_title, extra)

    def get_parent(self, extra=None):
        """Get the parent folder."""
        return Folder.get_by_relative_url(self.site, parent_relative_url(self.relative_url), extra)

    @classmethod
    def get_all(cls, site, relative_url, extra=None):
        """
        Get the sub folders of a folder, system folders excluded.

        Args:
            site (Site): SharePoint site
            relative_url (str): Server relative URL of the parent folder
            extra (dict): Extra payload values to map

        Returns:
            dict: Folders keyed by GUID
        """
        payload = site.request(f"_api/web/GetFolderByServerRelativeUrl('{quote_odata(relative_url)}')/Folders", {
            'headers': site.build_headers(),
            'query': {'$expand': FOLDER_EXPAND},
        })

        folders = {}
        for data in payload['d']['results']:
            if is_system_folder(data.get('Name', '')):
                continue
            folder = cls(site, data, extra)
            folders[folder.guid] = folder

        return folders

    @classmethod
    def get_by_guid(cls, site, guid, extra=None):
        """Get a folder by GUID."""
        payload = site.request(f"_api/web/GetFolderById('{guid}')", {
            'headers': site.build_headers(),
            'query': {'$expand': FOLDER_EXPAND},
        })

        return cls(site, payload['d'], extra)

    @classmethod
    def get_by_relative_url(cls, site, relative_url, extra=None):
        """
        Get a folder by server relative URL.

        Raises:
            SharePointError: If the URL points to a system folder
        """
        if is_system_folder(relative_url):
            raise SharePointError(f"Trying to get a SharePoint system folder: {relative_url}")

        payload = site.request(f"_api/web/GetFolderByServerRelativeUrl('{quote_odata(relative_url)}')", {
            'headers': site.build_headers(),
            'query': {'$expand': FOLDER_EXPAND},
        })

        return cls(site, payload['d'], extra)

    @classmethod
    def create(cls, folder, name, extra=None):
        """
        Create a folder.

        Args:
            folder (FolderInterface): Parent folder or list
            name (str): Folder name
            extra (dict): Extra payload values to map

        Returns:
            Folder: The new folder
        """
        folder.is_writable(raise_error=True)

        body = json.dumps({
            '__metadata': {'type': 'SP.Folder'},
            'ServerRelativeUrl': folder.get_relative_url(name),
        })

        payload = folder.request('_api/web/Folders', {
            'headers': folder.build_headers(digest=True, extra={
                'Content-Type': ODATA_VERBOSE,
            }),
            'query': {'$expand': FOLDER_EXPAND},
            'body': body,
        }, 'POST')

        return cls(folder.get_site(), payload['d'], extra)

    def update(self, properties):
        """
        Update folder properties (Name, ...).

        The API returns no body on a successful update, so the folder is
        rehydrated from the properties that were sent.

        Returns:
            Folder: This folder
        """
        properties = {**properties, '__metadata': {'type': 'SP.Folder'}}

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
        """Delete this folder."""
        self.request(self.endpoint, {
            'headers': self.build_headers(digest=True, extra={
                'X-HTTP-Method': 'DELETE',
                'IF-MATCH': '*',
            }),
        }, 'POST')

        return True

    def get_item_count(self):
        """Get the number of items (folders and files) in this folder."""
        payload = self.request(f"{self.endpoint}/ItemCount", {
            'headers': self.build_headers(),
        })

        self.item_count = to_int(resolve(payload, 'd.ItemCount') or 0)
        return self.item_count

    def get_items(self, folder_extra=None, file_extra=None):
        """
        Load the sub folders and files of this folder into the container.

        Args:
            folder_extra (dict): Extra folder payload values to map
            file_extra (dict): Extra file payload values to map

        Returns:
            dict: Folders and files keyed by GUID
        """
        from .files import File

        folders = Folder.get_all(self.site, self.relative_url, folder_extra)
        files = File.get_all(self, file_extra)

        self.items = {**folders, **files}
        return self.items

    def create_folder(self, name, extra=None):
        """Create a sub folder and add it to the container."""
        folder = Folder.create(self, name, extra)
        self[folder.guid] = folder
        return folder

    def upload(self, content, name=None, overwrite=False, extra=None):
        """Upload a file into this folder and add it to the container."""
        from .files import File

        file = File.create(self, content, name=name, overwrite=overwrite, extra=extra)
        self[file.guid] = file
        return file
