"""
Natural-language command parser for quick interactive use.

Maps phrases such as "list sites" or "purge page cache for install <id>" to
a tool name plus arguments. Matching is keyword based; parsed commands go
through the normal invocation pipeline, so malformed IDs are still caught
by validation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from wpengine_mcp.schemas import Operation

_ID = r"([0-9a-fA-F-]{8,})"
_FILLER = r"(?:(?:info|details|id)\s+)*"
_SITE_ID = re.compile(r"site\s+" + _FILLER + _ID, re.IGNORECASE)
_ACCOUNT_ID = re.compile(r"account\s+" + _FILLER + _ID, re.IGNORECASE)
_INSTALL_ID = re.compile(r"install(?:ation)?\s+" + _FILLER + _ID, re.IGNORECASE)
_CACHE_TYPE = re.compile(
    r"\b(all|object|page|cdn)\s+cache\b|\bcache\s+(all|object|page|cdn)\b", re.IGNORECASE
)
_SITE_NAME = re.compile(r"create\s+site\s+(?:named\s+|called\s+)?([a-zA-Z0-9_-]+)", re.IGNORECASE)
_EMAIL = re.compile(r"[^\s@,;]+@[^\s@,;]+\.[^\s@,;]+")

DEFAULT_BACKUP_DESCRIPTION = "Backup created via chat"

HELP_TEXT = """\
Available WP Engine commands:

Account management:
  list accounts
  get account info <account-id>
  list users for account <account-id>

Site management:
  list sites
  get site info <site-id>
  create site named <site-name> in account <account-id>
  delete site <site-id>

Installation management:
  list installs
  get install info <install-id>
  list domains for install <install-id>

Backups and cache:
  create backup for install <install-id> notify <email>
  purge [all|object|page|cdn] cache for install <install-id>

SSH keys:
  list ssh keys

System:
  api status
  current user
"""


@dataclass(frozen=True)
class ChatCommand:
    operation: Operation
    arguments: dict[str, Any] = field(default_factory=dict)


def _match(pattern: re.Pattern[str], message: str) -> str | None:
    m = pattern.search(message)
    return m.group(1) if m else None


def _has(text: str, *words: str) -> bool:
    return all(w in text for w in words)


def parse_message(message: str) -> ChatCommand | None:
    """Return the command a message asks for, or None if nothing matches."""
    text = message.lower()
    site_id = _match(_SITE_ID, message)
    account_id = _match(_ACCOUNT_ID, message)
    install_id = _match(_INSTALL_ID, message)

    if _has(text, "api", "status"):
        return ChatCommand(Operation.GET_API_STATUS)
    if _has(text, "current", "user"):
        return ChatCommand(Operation.GET_CURRENT_USER)

    if "list" in text:
        if "users" in text and account_id:
            return ChatCommand(Operation.LIST_ACCOUNT_USERS, {"account_id": account_id})
        if "domains" in text and install_id:
            return ChatCommand(Operation.LIST_DOMAINS, {"install_id": install_id})
        if "ssh" in text:
            return ChatCommand(Operation.LIST_SSH_KEYS)
        if "accounts" in text:
            return ChatCommand(Operation.LIST_ACCOUNTS)
        if "installs" in text or "installations" in text:
            args = {"account_id": account_id} if account_id else {}
            return ChatCommand(Operation.LIST_INSTALLS, args)
        if "sites" in text or "websites" in text:
            args = {"account_id": account_id} if account_id else {}
            return ChatCommand(Operation.LIST_SITES, args)

    if _has(text, "purge", "cache") and install_id:
        m = _CACHE_TYPE.search(message)
        cache_type = (m.group(1) or m.group(2)).lower() if m else "all"
        return ChatCommand(Operation.PURGE_CACHE, {"install_id": install_id, "type": cache_type})

    if _has(text, "create", "backup") and install_id:
        args = {
            "install_id": install_id,
            "description": DEFAULT_BACKUP_DESCRIPTION,
        }
        emails = _EMAIL.findall(message)
        if emails:
            args["notification_emails"] = emails
        return ChatCommand(Operation.CREATE_BACKUP, args)

    if _has(text, "create", "site"):
        name = _match(_SITE_NAME, message)
        if name:
            args = {"name": name}
            if account_id:
                args["account_id"] = account_id
            return ChatCommand(Operation.CREATE_SITE, args)

    if _has(text, "delete", "site") and site_id:
        return ChatCommand(Operation.DELETE_SITE, {"site_id": site_id})

    wants_detail = "info" in text or "details" in text or text.startswith("get ")
    if wants_detail:
        if "install" in text and install_id:
            return ChatCommand(Operation.GET_INSTALL, {"install_id": install_id})
        if "site" in text and site_id:
            return ChatCommand(Operation.GET_SITE, {"site_id": site_id})
        if "account" in text and account_id:
            return ChatCommand(Operation.GET_ACCOUNT, {"account_id": account_id})

    return None
