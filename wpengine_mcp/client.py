"""
WPEngineClient: thin wrapper over the WP Engine REST API (v1).

One method per tool operation. Methods own the REST path and wire body
shape and return a Success/Failure outcome from ``api.request``; they never
raise for HTTP or network failures.
"""

from __future__ import annotations

import urllib.parse
from typing import Any

from wpengine_mcp import api
from wpengine_mcp.models import Outcome


def _seg(value: str) -> str:
    """Quote a path segment."""
    return urllib.parse.quote(str(value), safe="")


def _compact(**fields: Any) -> dict[str, Any]:
    """Drop keys whose value is None (optional parameters not given)."""
    return {k: v for k, v in fields.items() if v is not None}


class WPEngineClient:
    """Synchronous client for https://api.wpengineapi.com/v1."""

    def _get(self, path: str, **params: Any) -> Outcome:
        return api.request("GET", path, params=_compact(**params) or None)

    def _post(self, path: str, body: dict[str, Any] | None = None) -> Outcome:
        return api.request("POST", path, data=body if body is not None else {})

    def _patch(self, path: str, body: dict[str, Any]) -> Outcome:
        return api.request("PATCH", path, data=body)

    def _delete(self, path: str) -> Outcome:
        return api.request("DELETE", path)

    # -- status / identity --------------------------------------------------

    def get_api_status(self) -> Outcome:
        return self._get("/status")

    def get_current_user(self) -> Outcome:
        return self._get("/user")

    # -- accounts -----------------------------------------------------------

    def list_accounts(self, limit: int = 25, offset: int = 0) -> Outcome:
        return self._get("/accounts", limit=limit, offset=offset)

    def get_account(self, account_id: str) -> Outcome:
        return self._get(f"/accounts/{_seg(account_id)}")

    # -- sites --------------------------------------------------------------

    def list_sites(
        self, limit: int = 25, offset: int = 0, account_id: str | None = None
    ) -> Outcome:
        return self._get("/sites", limit=limit, offset=offset, account_id=account_id)

    def get_site(self, site_id: str) -> Outcome:
        return self._get(f"/sites/{_seg(site_id)}")

    def create_site(self, name: str, account_id: str) -> Outcome:
        return self._post("/sites", {"name": name, "account_id": account_id})

    def update_site(self, site_id: str, name: str | None = None) -> Outcome:
        return self._patch(f"/sites/{_seg(site_id)}", _compact(name=name))

    def delete_site(self, site_id: str) -> Outcome:
        return self._delete(f"/sites/{_seg(site_id)}")

    # -- installs -----------------------------------------------------------

    def list_installs(
        self, limit: int = 25, offset: int = 0, account_id: str | None = None
    ) -> Outcome:
        return self._get("/installs", limit=limit, offset=offset, account_id=account_id)

    def get_install(self, install_id: str) -> Outcome:
        return self._get(f"/installs/{_seg(install_id)}")

    def create_install(
        self,
        name: str,
        account_id: str,
        site_id: str | None = None,
        environment: str | None = None,
    ) -> Outcome:
        body = _compact(name=name, account_id=account_id, site_id=site_id, environment=environment)
        return self._post("/installs", body)

    def update_install(
        self, install_id: str, site_id: str | None = None, environment: str | None = None
    ) -> Outcome:
        body = _compact(site_id=site_id, environment=environment)
        return self._patch(f"/installs/{_seg(install_id)}", body)

    def delete_install(self, install_id: str) -> Outcome:
        return self._delete(f"/installs/{_seg(install_id)}")

    # -- domains ------------------------------------------------------------

    def list_domains(self, install_id: str, limit: int = 25, offset: int = 0) -> Outcome:
        return self._get(f"/installs/{_seg(install_id)}/domains", limit=limit, offset=offset)

    def get_domain(self, install_id: str, domain_id: str) -> Outcome:
        return self._get(f"/installs/{_seg(install_id)}/domains/{_seg(domain_id)}")

    def create_domain(
        self,
        install_id: str,
        name: str,
        primary: bool | None = None,
        redirect_to: str | None = None,
    ) -> Outcome:
        body = _compact(name=name, primary=primary, redirect_to=redirect_to)
        return self._post(f"/installs/{_seg(install_id)}/domains", body)

    def update_domain(
        self,
        install_id: str,
        domain_id: str,
        primary: bool | None = None,
        redirect_to: str | None = None,
        secure_all_urls: bool | None = None,
    ) -> Outcome:
        body = _compact(primary=primary, redirect_to=redirect_to, secure_all_urls=secure_all_urls)
        return self._patch(f"/installs/{_seg(install_id)}/domains/{_seg(domain_id)}", body)

    def delete_domain(self, install_id: str, domain_id: str) -> Outcome:
        return self._delete(f"/installs/{_seg(install_id)}/domains/{_seg(domain_id)}")

    # -- backups / cache ----------------------------------------------------

    def create_backup(
        self, install_id: str, description: str, notification_emails: list[str]
    ) -> Outcome:
        body = {"description": description, "notification_emails": list(notification_emails)}
        return self._post(f"/installs/{_seg(install_id)}/backups", body)

    def get_backup(self, install_id: str, backup_id: str) -> Outcome:
        return self._get(f"/installs/{_seg(install_id)}/backups/{_seg(backup_id)}")

    def purge_cache(self, install_id: str, type: str) -> Outcome:
        return self._post(f"/installs/{_seg(install_id)}/purge_cache", {"type": type})

    # -- account users ------------------------------------------------------

    def list_account_users(self, account_id: str) -> Outcome:
        return self._get(f"/accounts/{_seg(account_id)}/account_users")

    def get_account_user(self, account_id: str, user_id: str) -> Outcome:
        return self._get(f"/accounts/{_seg(account_id)}/account_users/{_seg(user_id)}")

    def create_account_user(
        self,
        account_id: str,
        first_name: str,
        last_name: str,
        email: str,
        roles: str,
        install_ids: list[str] | None = None,
    ) -> Outcome:
        user = _compact(
            account_id=account_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            roles=roles,
            install_ids=install_ids,
        )
        return self._post(f"/accounts/{_seg(account_id)}/account_users", {"user": user})

    def update_account_user(
        self,
        account_id: str,
        user_id: str,
        roles: str,
        install_ids: list[str] | None = None,
    ) -> Outcome:
        body = _compact(roles=roles, install_ids=install_ids)
        return self._patch(f"/accounts/{_seg(account_id)}/account_users/{_seg(user_id)}", body)

    def delete_account_user(self, account_id: str, user_id: str) -> Outcome:
        return self._delete(f"/accounts/{_seg(account_id)}/account_users/{_seg(user_id)}")

    # -- SSH keys -----------------------------------------------------------

    def list_ssh_keys(self, limit: int = 25, offset: int = 0) -> Outcome:
        return self._get("/ssh_keys", limit=limit, offset=offset)

    def create_ssh_key(self, public_key: str) -> Outcome:
        return self._post("/ssh_keys", {"public_key": public_key})

    def delete_ssh_key(self, ssh_key_id: str) -> Outcome:
        return self._delete(f"/ssh_keys/{_seg(ssh_key_id)}")
