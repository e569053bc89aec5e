"""
Operation dispatcher: one forwarding call per Operation.

Handlers only move validated fields onto the matching client method;
optional fields are forwarded when present and omitted otherwise.
"""

from __future__ import annotations

from collections.abc import Callable

from wpengine_mcp.models import Outcome, ValidatedArguments
from wpengine_mcp.schemas import Operation

Handler = Callable[..., Outcome]


def _optional(args: ValidatedArguments, *names: str) -> dict:
    return {n: args[n] for n in names if n in args}


_HANDLERS: dict[Operation, Handler] = {
    # status / identity
    Operation.GET_API_STATUS: lambda c, a: c.get_api_status(),
    Operation.GET_CURRENT_USER: lambda c, a: c.get_current_user(),
    # accounts
    Operation.LIST_ACCOUNTS: lambda c, a: c.list_accounts(limit=a["limit"], offset=a["offset"]),
    Operation.GET_ACCOUNT: lambda c, a: c.get_account(a["account_id"]),
    # sites
    Operation.LIST_SITES: lambda c, a: c.list_sites(
        limit=a["limit"], offset=a["offset"], **_optional(a, "account_id")
    ),
    Operation.GET_SITE: lambda c, a: c.get_site(a["site_id"]),
    Operation.CREATE_SITE: lambda c, a: c.create_site(name=a["name"], account_id=a["account_id"]),
    Operation.UPDATE_SITE: lambda c, a: c.update_site(a["site_id"], **_optional(a, "name")),
    Operation.DELETE_SITE: lambda c, a: c.delete_site(a["site_id"]),
    # installs
    Operation.LIST_INSTALLS: lambda c, a: c.list_installs(
        limit=a["limit"], offset=a["offset"], **_optional(a, "account_id")
    ),
    Operation.GET_INSTALL: lambda c, a: c.get_install(a["install_id"]),
    Operation.CREATE_INSTALL: lambda c, a: c.create_install(
        name=a["name"],
        account_id=a["account_id"],
        **_optional(a, "site_id", "environment"),
    ),
    Operation.UPDATE_INSTALL: lambda c, a: c.update_install(
        a["install_id"], **_optional(a, "site_id", "environment")
    ),
    Operation.DELETE_INSTALL: lambda c, a: c.delete_install(a["install_id"]),
    # domains
    Operation.LIST_DOMAINS: lambda c, a: c.list_domains(
        a["install_id"], limit=a["limit"], offset=a["offset"]
    ),
    Operation.GET_DOMAIN: lambda c, a: c.get_domain(a["install_id"], a["domain_id"]),
    Operation.CREATE_DOMAIN: lambda c, a: c.create_domain(
        a["install_id"], name=a["name"], **_optional(a, "primary", "redirect_to")
    ),
    Operation.UPDATE_DOMAIN: lambda c, a: c.update_domain(
        a["install_id"],
        a["domain_id"],
        **_optional(a, "primary", "redirect_to", "secure_all_urls"),
    ),
    Operation.DELETE_DOMAIN: lambda c, a: c.delete_domain(a["install_id"], a["domain_id"]),
    # backups / cache
    Operation.CREATE_BACKUP: lambda c, a: c.create_backup(
        a["install_id"],
        description=a["description"],
        notification_emails=a["notification_emails"],
    ),
    Operation.GET_BACKUP: lambda c, a: c.get_backup(a["install_id"], a["backup_id"]),
    Operation.PURGE_CACHE: lambda c, a: c.purge_cache(a["install_id"], type=a["type"]),
    # account users
    Operation.LIST_ACCOUNT_USERS: lambda c, a: c.list_account_users(a["account_id"]),
    Operation.GET_ACCOUNT_USER: lambda c, a: c.get_account_user(a["account_id"], a["user_id"]),
    Operation.CREATE_ACCOUNT_USER: lambda c, a: c.create_account_user(
        a["account_id"],
        first_name=a["first_name"],
        last_name=a["last_name"],
        email=a["email"],
        roles=a["roles"],
        **_optional(a, "install_ids"),
    ),
    Operation.UPDATE_ACCOUNT_USER: lambda c, a: c.update_account_user(
        a["account_id"], a["user_id"], roles=a["roles"], **_optional(a, "install_ids")
    ),
    Operation.DELETE_ACCOUNT_USER: lambda c, a: c.delete_account_user(
        a["account_id"], a["user_id"]
    ),
    # SSH keys
    Operation.LIST_SSH_KEYS: lambda c, a: c.list_ssh_keys(limit=a["limit"], offset=a["offset"]),
    Operation.CREATE_SSH_KEY: lambda c, a: c.create_ssh_key(a["public_key"]),
    Operation.DELETE_SSH_KEY: lambda c, a: c.delete_ssh_key(a["ssh_key_id"]),
}

_UNHANDLED = set(Operation) - set(_HANDLERS)
if _UNHANDLED:
    raise RuntimeError(f"No dispatch handler for: {sorted(o.value for o in _UNHANDLED)}")


def dispatch(name: str, args: ValidatedArguments, client) -> Outcome:
    """Forward validated arguments to the one client method for ``name``.

    An unknown name here means the registry and this table disagree, which
    is a programming error, so it raises instead of returning a Failure.
    """
    try:
        operation = Operation(name)
    except ValueError:
        raise RuntimeError(f"dispatch called with unregistered operation {name!r}") from None
    return _HANDLERS[operation](client, args)
