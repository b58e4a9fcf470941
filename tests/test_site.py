import os
from datetime import datetime, timedelta, timezone

import pytest
import requests
import responses

from sharepoint_rest import AccessToken, Config, ContextInfo, Site
from sharepoint_rest.exceptions import AuthError, ConfigError, TransportError

from conftest import API_URL, SITE_URL, context_info_payload


def test_site_requires_a_valid_url():
    with pytest.raises(ConfigError) as error:
        Site({})
    assert error.value.field == "url"

    with pytest.raises(ConfigError):
        Site({"url": "contoso.sharepoint.com/sites/team"})


def test_site_urls():
    site = Site({"url": f"{SITE_URL}/"})

    assert site.get_url() == SITE_URL
    assert site.get_url("_api/web") == f"{SITE_URL}/_api/web"
    assert site.get_hostname() == "https://contoso.sharepoint.com"
    assert site.get_hostname("/sites/team/Docs") == "https://contoso.sharepoint.com/sites/team/Docs"
    assert site.get_relative_url() == "/sites/team/"
    assert site.get_relative_url("Docs") == "/sites/team/Docs"


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SHAREPOINT_URL", SITE_URL)
    monkeypatch.setenv("SHAREPOINT_CLIENT_ID", "client-id")
    monkeypatch.setenv("SHAREPOINT_TIMEOUT", "5")

    config = Config.from_env(dotenv_path=tmp_path / ".env")

    assert config.url == SITE_URL
    assert config.client_id == "client-id"
    assert config.timeout == 5.0
    assert config.secret is None
    assert config.login_endpoint == "login.microsoftonline.com"


def test_config_from_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(f"SPTEST_URL={SITE_URL}\nSPTEST_SECRET=s3cret\n")

    try:
        config = Config.from_env(prefix="SPTEST_", dotenv_path=env_file)
    finally:
        os.environ.pop("SPTEST_URL", None)
        os.environ.pop("SPTEST_SECRET", None)

    assert config.url == SITE_URL
    assert config.secret == "s3cret"


def test_get_access_token_requires_a_valid_token():
    site = Site({"url": SITE_URL})

    with pytest.raises(AuthError):
        site.get_access_token()

    past = datetime.now(timezone.utc) - timedelta(hours=2)
    expired = AccessToken({"access_token": "old", "expires_on": 60}, now=past)

    with pytest.raises(AuthError):
        site.set_access_token(expired)

    site.access_token = expired
    with pytest.raises(AuthError):
        site.get_access_token()


def test_request_resolves_relative_urls_and_sends_bearer(site, mocked):
    mocked.add(responses.GET, f"{API_URL}/web", json={"d": {"Title": "Team"}})

    payload = site.request("_api/web", {"headers": site.build_headers()})

    assert payload == {"d": {"Title": "Team"}}
    request = mocked.calls[0].request
    assert request.headers["Authorization"] == "Bearer token-value"
    assert request.headers["Accept"] == "application/json;odata=verbose"


def test_request_returns_empty_dict_for_empty_body(site, mocked):
    mocked.add(responses.POST, f"{API_URL}/web", body="", status=204)

    assert site.request("_api/web", method="POST") == {}


def test_request_can_return_raw_response(site, mocked):
    mocked.add(responses.GET, f"{API_URL}/file", body=b"\x00\x01")

    response = site.request("_api/file", json=False)

    assert response.content == b"\x00\x01"


def test_request_wraps_http_errors(site, mocked):
    mocked.add(responses.GET, f"{API_URL}/web", json={"error": "boom"}, status=500)

    with pytest.raises(TransportError) as error:
        site.request("_api/web")

    assert error.value.status_code == 500
    assert isinstance(error.value.cause, requests.exceptions.HTTPError)
    assert len(mocked.calls) == 1


def test_request_wraps_timeouts(site, mocked):
    mocked.add(responses.GET, f"{API_URL}/web", body=requests.exceptions.ReadTimeout("slow"))

    with pytest.raises(TransportError) as error:
        site.request("_api/web")

    assert isinstance(error.value.__cause__, requests.exceptions.Timeout)


def test_request_rejects_invalid_json(site, mocked):
    mocked.add(responses.GET, f"{API_URL}/web", body="<html/>")

    with pytest.raises(TransportError):
        site.request("_api/web")


def test_form_digest_is_fetched_once_while_valid(site, mocked, form_digest):
    assert site.get_form_digest() == form_digest
    assert site.get_form_digest() == form_digest

    assert len(mocked.calls) == 1
    assert site.context_info.library_version == "16.0.0.0"


def test_form_digest_is_refreshed_when_expired(site, mocked):
    mocked.add(responses.POST, f"{API_URL}/contextinfo", json=context_info_payload("first"))
    mocked.add(responses.POST, f"{API_URL}/contextinfo", json=context_info_payload("second"))

    assert site.get_form_digest() == "first"
    site.context_info.expiration = datetime.now(timezone.utc) - timedelta(seconds=1)

    assert site.get_form_digest() == "second"


def test_context_info_expiration():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    info = ContextInfo(context_info_payload(timeout=1800), now=now)

    assert info.expiration == now + timedelta(seconds=1800)
    assert not info.form_digest_has_expired(now=now + timedelta(seconds=1799))
    assert info.form_digest_has_expired(now=now + timedelta(seconds=1800))
    assert str(info) == "digest-value"


def test_context_info_accepts_naive_instants():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    info = ContextInfo(context_info_payload(timeout=1800), now=now)
    naive = now.replace(tzinfo=None)

    assert not info.form_digest_has_expired(now=naive + timedelta(seconds=1799))
    assert info.form_digest_has_expired(now=naive + timedelta(seconds=1800))


@pytest.mark.parametrize("timeout", [0, "0", -1])
def test_config_rejects_non_positive_timeout(timeout):
    config = Config(url=SITE_URL, timeout=timeout)

    with pytest.raises(ConfigError) as error:
        config.validate()

    assert error.value.field == "timeout"


def test_config_defaults_timeout_when_unset():
    assert Config(url=SITE_URL).timeout == 30
