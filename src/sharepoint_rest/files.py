# -*- coding: utf-8 -*-
"""
SharePoint files.

Files are addressed by server relative URL. Binary content is sent as the
raw request body and read back from the raw response.
"""

import os
from datetime import datetime, timezone

from .interfaces import ItemInterface
from .mapper import resolve, to_datetime, to_int
from .objects import SharePointObject
from .utils import is_debug_enabled, parent_relative_url, quote_odata

# Check in types (SP.CheckinType)
CHECKIN_MINOR = 0
CHECKIN_MAJOR = 1
CHECKIN_OVERWRITE = 2

# Check out types (SP.CheckOutType)
CHECK_OUT_ONLINE = 0
CHECK_OUT_OFFLINE = 1
CHECK_OUT_NONE = 2

CHECK_OUT_TYPES = {
    CHECK_OUT_ONLINE: 'Online',    # checked out for editing on the server
    CHECK_OUT_OFFLINE: 'Offline',  # checked out for editing on the local computer
    CHECK_OUT_NONE: 'None',        # not checked out
}

FILE_EXPAND = 'ListItemAllFields,Author'


def read_content(content):
    """
    Get the bytes to upload from the supported content types.

    Args:
        content (bytes | str | os.PathLike | file object): File content.
            Strings are UTF-8 encoded, paths are read from disk and file
            objects are read to the end.

    Returns:
        bytes: The content to upload

    Raises:
        TypeError: If the content type is not supported
    """
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)

    if isinstance(content, str):
        return content.encode('utf-8')

    if isinstance(content, os.PathLike):
        with open(content, 'rb') as handle:
            return handle.read()

    if hasattr(content, 'read'):
        data = content.read()
        if isinstance(data, str):
            data = data.encode('utf-8')
        return data

    raise TypeError(f"Invalid input type: {type(content).__name__}")


class File(SharePointObject, ItemInterface):
    """File stored in a SharePoint folder"""

    id = 0
    size = 0

    fields = {
        'sp_type': None,
        'id': to_int,
        'guid': None,
        'title': None,
        'name': None,
        'size': to_int,
        'created': to_datetime,
        'modified': to_datetime,
        'relative_url': None,
        'author': None,
        'check_in_comment': None,
        'check_out_type': to_int,
    }

    mapping = {
        'sp_type': '__metadata.type',
        'id': 'ListItemAllFields/ID',
        'guid': 'UniqueId',
        'title': 'Title',
        'name': 'Name',
        'size': 'Length',
        'created': 'TimeCreated',
        'modified': 'TimeLastModified',
        'relative_url': 'ServerRelativeUrl',
        'author': 'Author/LoginName',
        'check_in_comment': 'CheckInComment',
        'check_out_type': 'CheckOutType',
    }

    def __init__(self, folder, payload, extra=None, strict=False):
        """
        Build a file from a REST payload.

        Args:
            folder (FolderInterface): Folder (or list) holding the file
            payload (dict): File payload (the 'd' object)
            extra (dict): Extra payload values to map
            strict (bool): Fail when a mapped value is missing
        """
        self.folder = folder
        super().__init__(payload, extra, strict=strict)

    @property
    def endpoint(self):
        return f"_api/web/GetFileByServerRelativeUrl('{quote_odata(self.relative_url)}')"

    def get_folder(self):
        return self.folder

    def get_url(self):
        """Absolute URL of the file"""
        return self.folder.get_url(self.name)

    def get_check_out_type_name(self):
        """Check out type name ('Online', 'Offline' or 'None')"""
        return CHECK_OUT_TYPES.get(self.check_out_type)

    def get_metadata(self):
        """
        Get the file metadata.

        Returns:
            dict: id, guid, name, size, created, modified and url
        """
        return {
            'id': self.id,
            'guid': self.guid,
            'name': self.name,
            'size': self.size,
            'created': self.created,
            'modified': self.modified,
            'url': self.get_url(),
        }

    def get_contents(self):
        """
        Download the file contents.

        Returns:
            bytes: The file contents
        """
        response = self.folder.request(f"{self.endpoint}/$value", {
            'headers': self.folder.build_headers(accept=None),
        }, 'GET', json=False)

        return response.content

    def to_item(self, extra=None):
        """Get the list item that backs this file."""
        return self.folder.get_list().get_item(self.id, extra)

    @classmethod
    def get_all(cls, folder, extra=None):
        """
        Get the files of a folder.

        Args:
            folder (FolderInterface): SharePoint folder or list
            extra (dict): Extra payload values to map

        Returns:
            dict: Files keyed by GUID
        """
        url = f"_api/web/GetFolderByServerRelativeUrl('{quote_odata(folder.get_relative_url())}')/Files"
        payload = folder.request(url, {
            'headers': folder.build_headers(),
            'query': {'$expand': FILE_EXPAND},
        })

        files = {}
        for data in payload['d']['results']:
            file = cls(folder, data, extra)
            files[file.guid] = file

        return files

    @classmethod
    def fetch(cls, folder, relative_url, extra=None):
        """Get a file by server relative URL, attached to an already known folder."""
        payload = folder.request(f"_api/web/GetFileByServerRelativeUrl('{quote_odata(relative_url)}')", {
            'headers': folder.build_headers(),
            'query': {'$expand': FILE_EXPAND},
        })

        return cls(folder, payload['d'], extra)

    @classmethod
    def get_by_relative_url(cls, site, relative_url, extra=None):
        """
        Get a file by server relative URL.

        The parent folder is fetched as well, so the file can issue requests
        and build its URL.
        """
        from .folders import Folder

        folder = Folder.get_by_relative_url(site, parent_relative_url(relative_url))
        return cls.fetch(folder, relative_url, extra)

    @classmethod
    def get_by_name(cls, folder, name, extra=None):
        """Get a file of a folder by name."""
        folder.is_writable(raise_error=True)

        url = f"_api/web/GetFolderByServerRelativeUrl('{quote_odata(folder.get_relative_url())}')/Files('{quote_odata(name)}')"
        payload = folder.request(url, {
            'headers': folder.build_headers(),
            'query': {'$expand': FILE_EXPAND},
        })

        return cls(folder, payload['d'], extra)

    @classmethod
    def create(cls, folder, content, name=None, overwrite=False, extra=None):
        """
        Upload a file.

        Args:
            folder (FolderInterface): Destination folder or list
            content (bytes | str | os.PathLike | file object): File content
            name (str): File name (defaults to the file name of a path)
            overwrite (bool): Overwrite an existing file with the same name
            extra (dict): Extra payload values to map

        Returns:
            File: The uploaded file

        Raises:
            SharePointError: If the folder does not accept files
            ValueError: If no name is given and none can be derived
            TypeError: If the content type is not supported
        """
        folder.is_writable(raise_error=True)

        if not name:
            if not isinstance(content, os.PathLike):
                raise ValueError("The SharePoint File Name is empty/not set")
            name = os.path.basename(os.fspath(content))

        data = read_content(content)

        if is_debug_enabled():
            print(f"[DEBUG] Uploading {name} ({len(data)} bytes) to {folder.get_relative_url()}")

        url = (
            f"_api/web/GetFolderByServerRelativeUrl('{quote_odata(folder.get_relative_url())}')"
            f"/Files/Add(url='{quote_odata(name)}',overwrite={'true' if overwrite else 'false'})"
        )
        payload = folder.request(url, {
            'headers': folder.build_headers(digest=True),
            'query': {'$expand': 'ListItemAllFields'},
            'body': data,
        }, 'POST')

        return cls(folder, payload['d'], extra)

    def update(self, content):
        """
        Replace the file contents.

        The API returns no body on a successful update, so the size and
        modification time are rehydrated locally.

        Returns:
            File: This file
        """
        data = read_content(content)

        self.folder.request(f"{self.endpoint}/$value", {
            'headers': self.folder.build_headers(accept=None, digest=True, extra={
                'X-HTTP-Method': 'PUT',
            }),
            'body': data,
        }, 'POST')

        return self.hydrate({
            'Length': len(data),
            'TimeLastModified': datetime.now(timezone.utc),
        })

    def move(self, folder, name=None, extra=None):
        """
        Move the file to another folder.

        The API returns no body on a successful move, so the file is fetched
        again from its new location to rehydrate this object.

        Args:
            folder (FolderInterface): Destination folder or list
            name (str): New file name (default: keep the current name)
            extra (dict): Extra payload values to map

        Returns:
            File: This file
        """
        folder.is_writable(raise_error=True)

        new_url = folder.get_relative_url(name or self.name)

        self.folder.request(f"{self.endpoint}/moveTo(newUrl='{quote_odata(new_url)}',flags=1)", {
            'headers': self.folder.build_headers(digest=True),
        }, 'POST')

        moved = File.fetch(folder, new_url, extra)

        self.folder = folder
        self.mapper = moved.mapper
        self.extra = moved.extra
        for field in self.fields:
            setattr(self, field, getattr(moved, field))

        return self

    def copy(self, folder, name=None, overwrite=False, extra=None):
        """
        Copy the file to a folder.

        Args:
            folder (FolderInterface): Destination folder or list
            name (str): Name of the copy (default: the current name)
            overwrite (bool): Overwrite an existing file with the same name
            extra (dict): Extra payload values to map

        Returns:
            File: The copy
        """
        folder.is_writable(raise_error=True)

        new_url = folder.get_relative_url(name or self.name)
        flag = 'true' if overwrite else 'false'

        self.folder.request(f"{self.endpoint}/copyTo(strNewUrl='{quote_odata(new_url)}',bOverWrite={flag})", {
            'headers': self.folder.build_headers(digest=True),
        }, 'POST')

        return File.fetch(folder, new_url, extra)

    def recycle(self):
        """
        Move this file to the recycle bin.

        Returns:
            str: GUID of the recycle bin item
        """
        payload = self.folder.request(f"{self.endpoint}/recycle", {
            'headers': self.folder.build_headers(digest=True),
        }, 'POST')

        return resolve(payload, 'd.Recycle') or None

    def delete(self):
        """Delete this file."""
        self.folder.request(self.endpoint, {
            'headers': self.folder.build_headers(accept=None, digest=True, extra={
                'X-HTTP-Method': 'DELETE',
                'IF-MATCH': '*',
            }),
        }, 'POST')

        return True

    def check_in(self, comment, check_in_type=CHECKIN_MINOR):
        """
        Check in the file.

        Args:
            comment (str): Check in comment
            check_in_type (int): CHECKIN_MINOR, CHECKIN_MAJOR or CHECKIN_OVERWRITE
        """
        if check_in_type not in (CHECKIN_MINOR, CHECKIN_MAJOR, CHECKIN_OVERWRITE):
            raise ValueError(f"Invalid check in type: {check_in_type}")

        self.folder.request(f"{self.endpoint}/CheckIn(comment='{quote_odata(comment)}',checkintype={check_in_type})", {
            'headers': self.folder.build_headers(digest=True),
        }, 'POST')

        self.check_in_comment = comment
        self.check_out_type = CHECK_OUT_NONE
        return True

    def check_out(self):
        """Check out the file."""
        self.folder.request(f"{self.endpoint}/CheckOut()", {
            'headers': self.folder.build_headers(digest=True),
        }, 'POST')

        self.check_out_type = CHECK_OUT_ONLINE
        return True

