"""Tests for chat.py: plain-English command parsing."""

import pytest
from conftest import ACCOUNT_ID, INSTALL_ID, SITE_ID

from wpengine_mcp.chat import DEFAULT_BACKUP_DESCRIPTION, ChatCommand, parse_message
from wpengine_mcp.schemas import Operation


class TestParseMessage:
    @pytest.mark.parametrize(
        "message,operation",
        [
            ("api status", Operation.GET_API_STATUS),
            ("Show the current user", Operation.GET_CURRENT_USER),
            ("list accounts", Operation.LIST_ACCOUNTS),
            ("list sites", Operation.LIST_SITES),
            ("list all websites", Operation.LIST_SITES),
            ("list installs", Operation.LIST_INSTALLS),
            ("list ssh keys", Operation.LIST_SSH_KEYS),
        ],
    )
    def test_simple_commands(self, message, operation):
        assert parse_message(message) == ChatCommand(operation)

    def test_list_sites_for_account(self):
        command = parse_message(f"list sites in account {ACCOUNT_ID}")
        assert command == ChatCommand(Operation.LIST_SITES, {"account_id": ACCOUNT_ID})

    def test_list_users_for_account(self):
        command = parse_message(f"list users for account {ACCOUNT_ID}")
        assert command == ChatCommand(Operation.LIST_ACCOUNT_USERS, {"account_id": ACCOUNT_ID})

    def test_list_domains_for_install(self):
        command = parse_message(f"list domains for install {INSTALL_ID}")
        assert command == ChatCommand(Operation.LIST_DOMAINS, {"install_id": INSTALL_ID})

    def test_get_site_info(self):
        command = parse_message(f"get site info {SITE_ID}")
        assert command == ChatCommand(Operation.GET_SITE, {"site_id": SITE_ID})

    def test_get_install_details(self):
        command = parse_message(f"show install details {INSTALL_ID}")
        assert command == ChatCommand(Operation.GET_INSTALL, {"install_id": INSTALL_ID})

    def test_get_account_info(self):
        command = parse_message(f"get account info {ACCOUNT_ID}")
        assert command == ChatCommand(Operation.GET_ACCOUNT, {"account_id": ACCOUNT_ID})

    def test_create_site(self):
        command = parse_message(f"create site named my-blog in account {ACCOUNT_ID}")
        assert command == ChatCommand(
            Operation.CREATE_SITE, {"name": "my-blog", "account_id": ACCOUNT_ID}
        )

    def test_create_site_without_account(self):
        assert parse_message("create site called shop").arguments == {"name": "shop"}

    def test_delete_site(self):
        command = parse_message(f"delete site {SITE_ID}")
        assert command == ChatCommand(Operation.DELETE_SITE, {"site_id": SITE_ID})

    def test_purge_cache_default_all(self):
        command = parse_message(f"purge cache for install {INSTALL_ID}")
        assert command == ChatCommand(
            Operation.PURGE_CACHE, {"install_id": INSTALL_ID, "type": "all"}
        )

    def test_purge_page_cache(self):
        command = parse_message(f"Purge PAGE cache for install {INSTALL_ID}")
        assert command.arguments["type"] == "page"

    def test_create_backup_collects_emails(self):
        command = parse_message(
            f"create backup for install {INSTALL_ID} notify ops@example.com, dev@example.com"
        )
        assert command.operation is Operation.CREATE_BACKUP
        assert command.arguments == {
            "install_id": INSTALL_ID,
            "description": DEFAULT_BACKUP_DESCRIPTION,
            "notification_emails": ["ops@example.com", "dev@example.com"],
        }

    def test_create_backup_without_email(self):
        command = parse_message(f"create backup for install {INSTALL_ID}")
        assert "notification_emails" not in command.arguments

    @pytest.mark.parametrize("message", ["", "hello there", "delete site", "get site info"])
    def test_unrecognized(self, message):
        assert parse_message(message) is None
