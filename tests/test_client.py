"""Tests for client.py: REST paths and wire bodies per operation."""

from unittest.mock import patch

import pytest
from conftest import ACCOUNT_ID, DOMAIN_ID, INSTALL_ID, SITE_ID, USER_ID

from wpengine_mcp.client import WPEngineClient, _compact, _seg
from wpengine_mcp.models import Failure, Success


@pytest.fixture
def mock_request():
    with patch("wpengine_mcp.client.api.request") as m:
        m.return_value = Success({"ok": True})
        yield m


class TestHelpers:
    def test_seg_quotes_slashes(self):
        assert _seg("a/b") == "a%2Fb"

    def test_compact_drops_none(self):
        assert _compact(a=1, b=None, c=False) == {"a": 1, "c": False}


class TestReads:
    def test_status(self, mock_request):
        WPEngineClient().get_api_status()
        mock_request.assert_called_once_with("GET", "/status", params=None)

    def test_current_user(self, mock_request):
        WPEngineClient().get_current_user()
        mock_request.assert_called_once_with("GET", "/user", params=None)

    def test_list_sites_with_account_filter(self, mock_request):
        WPEngineClient().list_sites(limit=10, offset=5, account_id=ACCOUNT_ID)
        mock_request.assert_called_once_with(
            "GET", "/sites", params={"limit": 10, "offset": 5, "account_id": ACCOUNT_ID}
        )

    def test_list_sites_omits_unset_account(self, mock_request):
        WPEngineClient().list_sites()
        mock_request.assert_called_once_with("GET", "/sites", params={"limit": 25, "offset": 0})

    def test_get_domain(self, mock_request):
        WPEngineClient().get_domain(INSTALL_ID, DOMAIN_ID)
        mock_request.assert_called_once_with(
            "GET", f"/installs/{INSTALL_ID}/domains/{DOMAIN_ID}", params=None
        )

    def test_list_account_users(self, mock_request):
        WPEngineClient().list_account_users(ACCOUNT_ID)
        mock_request.assert_called_once_with(
            "GET", f"/accounts/{ACCOUNT_ID}/account_users", params=None
        )


class TestWrites:
    def test_create_site(self, mock_request):
        WPEngineClient().create_site(name="my-blog", account_id=ACCOUNT_ID)
        mock_request.assert_called_once_with(
            "POST", "/sites", data={"name": "my-blog", "account_id": ACCOUNT_ID}
        )

    def test_update_site_patch(self, mock_request):
        WPEngineClient().update_site(SITE_ID, name="renamed")
        mock_request.assert_called_once_with("PATCH", f"/sites/{SITE_ID}", data={"name": "renamed"})

    def test_delete_site(self, mock_request):
        WPEngineClient().delete_site(SITE_ID)
        mock_request.assert_called_once_with("DELETE", f"/sites/{SITE_ID}")

    def test_create_install_optional_fields(self, mock_request):
        WPEngineClient().create_install(name="myinstall", account_id=ACCOUNT_ID)
        mock_request.assert_called_once_with(
            "POST", "/installs", data={"name": "myinstall", "account_id": ACCOUNT_ID}
        )

    def test_update_domain_body(self, mock_request):
        WPEngineClient().update_domain(INSTALL_ID, DOMAIN_ID, secure_all_urls=True)
        mock_request.assert_called_once_with(
            "PATCH",
            f"/installs/{INSTALL_ID}/domains/{DOMAIN_ID}",
            data={"secure_all_urls": True},
        )

    def test_create_backup(self, mock_request):
        WPEngineClient().create_backup(INSTALL_ID, "nightly", ("ops@example.com",))
        mock_request.assert_called_once_with(
            "POST",
            f"/installs/{INSTALL_ID}/backups",
            data={"description": "nightly", "notification_emails": ["ops@example.com"]},
        )

    def test_purge_cache(self, mock_request):
        WPEngineClient().purge_cache(INSTALL_ID, type="page")
        mock_request.assert_called_once_with(
            "POST", f"/installs/{INSTALL_ID}/purge_cache", data={"type": "page"}
        )

    def test_create_account_user_wraps_user(self, mock_request):
        WPEngineClient().create_account_user(
            ACCOUNT_ID, first_name="Ada", last_name="L", email="ada@example.com", roles="full"
        )
        _, path = mock_request.call_args[0]
        body = mock_request.call_args[1]["data"]
        assert path == f"/accounts/{ACCOUNT_ID}/account_users"
        assert body["user"]["email"] == "ada@example.com"
        assert body["user"]["account_id"] == ACCOUNT_ID
        assert "install_ids" not in body["user"]

    def test_delete_account_user(self, mock_request):
        WPEngineClient().delete_account_user(ACCOUNT_ID, USER_ID)
        mock_request.assert_called_once_with(
            "DELETE", f"/accounts/{ACCOUNT_ID}/account_users/{USER_ID}"
        )

    def test_create_ssh_key(self, mock_request):
        WPEngineClient().create_ssh_key("ssh-ed25519 AAAA")
        mock_request.assert_called_once_with(
            "POST", "/ssh_keys", data={"public_key": "ssh-ed25519 AAAA"}
        )


class TestOutcomes:
    def test_failure_passes_through(self, mock_request):
        failure = Failure(kind="not_found", message="gone", status=404)
        mock_request.return_value = failure
        assert WPEngineClient().get_site(SITE_ID) is failure
