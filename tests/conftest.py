"""Pytest configuration shared across the suite."""

import pytest
import responses

from sharepoint_rest import AccessToken, Site

SITE_URL = "https://contoso.sharepoint.com/sites/team"
API_URL = f"{SITE_URL}/_api"
DOCS_URL = "/sites/team/Shared Documents"


def context_info_payload(digest="digest-value", timeout=1800):
    return {
        "d": {
            "GetContextWebInformation": {
                "FormDigestValue": digest,
                "FormDigestTimeoutSeconds": timeout,
                "LibraryVersion": "16.0.0.0",
                "SiteFullUrl": SITE_URL,
                "WebFullUrl": SITE_URL,
            }
        }
    }


def list_payload(**overrides):
    payload = {
        "__metadata": {"type": "SP.List"},
        "Id": "list-guid",
        "Title": "Documents",
        "Description": "Team documents",
        "BaseTemplate": 101,
        "ItemCount": 2,
        "ListItemEntityTypeFullName": "SP.Data.Shared_x0020_DocumentsItem",
        "RootFolder": {"ServerRelativeUrl": DOCS_URL},
        "Created": "2016-01-01T10:00:00Z",
        "LastItemModifiedDate": "2016-02-01T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def folder_payload(name="Reports", **overrides):
    payload = {
        "__metadata": {"type": "SP.Folder"},
        "UniqueId": f"{name.lower()}-guid",
        "Name": name,
        "ServerRelativeUrl": f"{DOCS_URL}/{name}",
        "ItemCount": 0,
        "ListItemAllFields": {"ParentList": {"Id": "list-guid"}},
        "Properties": {},
        "TimeCreated": "2016-01-01T10:00:00Z",
        "TimeLastModified": "2016-01-02T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def file_payload(name="report.txt", folder_url=f"{DOCS_URL}/Reports", **overrides):
    payload = {
        "__metadata": {"type": "SP.File"},
        "UniqueId": f"{name}-guid",
        "ListItemAllFields": {"ID": 7, "GUID": "item-guid"},
        "Title": None,
        "Name": name,
        "Length": "5",
        "TimeCreated": "2016-01-01T10:00:00Z",
        "TimeLastModified": "2016-01-02T10:00:00Z",
        "ServerRelativeUrl": f"{folder_url}/{name}",
        "Author": {"LoginName": "i:0#.f|membership|bob@contoso.com"},
        "CheckInComment": "",
        "CheckOutType": 2,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def site():
    site = Site({"url": SITE_URL})
    site.set_access_token(AccessToken({"access_token": "token-value", "expires_on": 3600}))
    return site


@pytest.fixture
def form_digest(mocked):
    mocked.add(responses.POST, f"{API_URL}/contextinfo", json=context_info_payload())
    return "digest-value"
