"""
Schema registry: argument declarations for every WP Engine tool.

The registry is built once by ``build_registry()`` and frozen; the validator,
dispatcher and catalog exporter receive it by reference.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from wpengine_mcp.config import VALID_CACHE_TYPES, VALID_ENVIRONMENTS, VALID_USER_ROLES
from wpengine_mcp.exceptions import CliError, DuplicateOperationError, UnknownOperationError

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
INSTALL_NAME_PATTERN = r"^[a-z][a-z0-9]{2,13}$"
DOMAIN_PATTERN = (
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

FIELD_TYPES = frozenset({"string", "integer", "number", "boolean", "array", "enum"})


class Operation(str, Enum):
    """Closed set of tool names."""

    GET_API_STATUS = "get_api_status"
    GET_CURRENT_USER = "get_current_user"
    LIST_ACCOUNTS = "list_accounts"
    GET_ACCOUNT = "get_account"
    LIST_SITES = "list_sites"
    GET_SITE = "get_site"
    CREATE_SITE = "create_site"
    UPDATE_SITE = "update_site"
    DELETE_SITE = "delete_site"
    LIST_INSTALLS = "list_installs"
    GET_INSTALL = "get_install"
    CREATE_INSTALL = "create_install"
    UPDATE_INSTALL = "update_install"
    DELETE_INSTALL = "delete_install"
    LIST_DOMAINS = "list_domains"
    GET_DOMAIN = "get_domain"
    CREATE_DOMAIN = "create_domain"
    UPDATE_DOMAIN = "update_domain"
    DELETE_DOMAIN = "delete_domain"
    CREATE_BACKUP = "create_backup"
    GET_BACKUP = "get_backup"
    PURGE_CACHE = "purge_cache"
    LIST_ACCOUNT_USERS = "list_account_users"
    GET_ACCOUNT_USER = "get_account_user"
    CREATE_ACCOUNT_USER = "create_account_user"
    UPDATE_ACCOUNT_USER = "update_account_user"
    DELETE_ACCOUNT_USER = "delete_account_user"
    LIST_SSH_KEYS = "list_ssh_keys"
    CREATE_SSH_KEY = "create_ssh_key"
    DELETE_SSH_KEY = "delete_ssh_key"


@dataclass(frozen=True)
class Field:
    """Declared shape and constraints of one argument."""

    name: str
    type: str
    description: str = ""
    required: bool = False
    default: Any = None
    pattern: str | None = None
    pattern_message: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None
    min_items: int | None = None
    max_items: int | None = None
    items: Field | None = None
    choices: tuple[str, ...] = ()

    def __post_init__(self):
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unsupported field type {self.type!r} for {self.name}")
        if self.type == "enum" and not self.choices:
            raise ValueError(f"Enum field {self.name} declares no choices")
        if self.type == "array" and self.items is None:
            raise ValueError(f"Array field {self.name} declares no element schema")

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        return re.compile(self.pattern) if self.pattern else None


@dataclass(frozen=True)
class Mutation:
    """Success-message metadata for create/update/delete style operations."""

    resource: str
    verb: str
    subject: tuple[str, ...] = ()


@dataclass(frozen=True)
class Schema:
    name: str
    description: str
    fields: tuple[Field, ...] = ()
    mutation: Mutation | None = None

    def field_names(self) -> set[str]:
        return {f.name for f in self.fields}

    def required_names(self) -> set[str]:
        return {f.name for f in self.fields if f.required}

    def optional_names(self) -> set[str]:
        return {f.name for f in self.fields if not f.required}


class SchemaRegistry:
    """Name -> Schema table. Read-only once frozen."""

    def __init__(self, schemas=()):
        self._schemas: dict[str, Schema] = {}
        self._frozen = False
        for schema in schemas:
            self.register(schema)

    def register(self, schema: Schema) -> None:
        if self._frozen:
            raise CliError(f"[ERROR] Schema registry is frozen; cannot add {schema.name}")
        if schema.name in self._schemas:
            raise DuplicateOperationError(schema.name)
        self._schemas[schema.name] = schema

    def lookup(self, name: str) -> Schema:
        try:
            return self._schemas[name]
        except (KeyError, TypeError):
            raise UnknownOperationError(name) from None

    def freeze(self) -> SchemaRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> list[str]:
        return list(self._schemas)

    def __contains__(self, name) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)


# ---------------------------------------------------------------------------
# Field builders
# ---------------------------------------------------------------------------


def _uuid(name, description, required=True):
    return Field(
        name,
        "string",
        description=description,
        required=required,
        pattern=UUID_PATTERN,
        pattern_message=f"Invalid UUID format for {name}",
    )


def _paging():
    return (
        Field(
            "limit",
            "integer",
            description="Number of results to return (1-100, default 25)",
            default=25,
            minimum=1,
            maximum=100,
        ),
        Field(
            "offset",
            "integer",
            description="Number of results to skip (default 0)",
            default=0,
            minimum=0,
        ),
    )


def _install_ids():
    return Field(
        "install_ids",
        "array",
        description="Install IDs the user may access (partial roles only)",
        items=_uuid("install_id", "Install ID"),
    )


_ENVIRONMENT = Field(
    "environment",
    "enum",
    description="Install environment",
    choices=VALID_ENVIRONMENTS,
)

_ROLES = Field(
    "roles",
    "enum",
    description="Account role for the user",
    required=True,
    choices=VALID_USER_ROLES,
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def _catalog() -> list[Schema]:
    op = Operation
    return [
        # --- status / identity ---
        Schema(op.GET_API_STATUS.value, "Check the WP Engine API status."),
        Schema(op.GET_CURRENT_USER.value, "Get the user that owns the configured API credentials."),
        # --- accounts ---
        Schema(
            op.LIST_ACCOUNTS.value,
            "List the accounts these credentials can access.",
            _paging(),
        ),
        Schema(
            op.GET_ACCOUNT.value,
            "Get details for one account.",
            (_uuid("account_id", "Account ID"),),
        ),
        # --- sites ---
        Schema(
            op.LIST_SITES.value,
            "List sites, optionally filtered by account.",
            (*_paging(), _uuid("account_id", "Only sites in this account", required=False)),
        ),
        Schema(op.GET_SITE.value, "Get details for one site.", (_uuid("site_id", "Site ID"),)),
        Schema(
            op.CREATE_SITE.value,
            "Create a site in an account.",
            (
                Field(
                    "name", "string", description="Site name", required=True,
                    min_length=3, max_length=50,
                ),
                _uuid("account_id", "Account that will own the site"),
            ),
            Mutation("Site", "created", ("name",)),
        ),
        Schema(
            op.UPDATE_SITE.value,
            "Rename a site.",
            (
                _uuid("site_id", "Site ID"),
                Field("name", "string", description="New site name", min_length=3, max_length=50),
            ),
            Mutation("Site", "updated", ("name", "site_id")),
        ),
        Schema(
            op.DELETE_SITE.value,
            "Permanently delete a site and all of its installs.",
            (_uuid("site_id", "Site ID"),),
            Mutation("Site", "deleted", ("site_id",)),
        ),
        # --- installs ---
        Schema(
            op.LIST_INSTALLS.value,
            "List installs (WordPress environments), optionally filtered by account.",
            (*_paging(), _uuid("account_id", "Only installs in this account", required=False)),
        ),
        Schema(
            op.GET_INSTALL.value,
            "Get details for one install.",
            (_uuid("install_id", "Install ID"),),
        ),
        Schema(
            op.CREATE_INSTALL.value,
            "Create an install, optionally attached to a site.",
            (
                Field(
                    "name",
                    "string",
                    description="Install name: 3-14 lowercase letters/digits, letter first",
                    required=True,
                    pattern=INSTALL_NAME_PATTERN,
                    pattern_message=(
                        "Install name must be 3-14 characters, lowercase letters and "
                        "numbers, starting with letter"
                    ),
                ),
                _uuid("account_id", "Account that will own the install"),
                _uuid("site_id", "Site to attach the install to", required=False),
                _ENVIRONMENT,
            ),
            Mutation("Install", "created", ("name",)),
        ),
        Schema(
            op.UPDATE_INSTALL.value,
            "Move an install to another site or change its environment.",
            (
                _uuid("install_id", "Install ID"),
                _uuid("site_id", "New site for the install", required=False),
                _ENVIRONMENT,
            ),
            Mutation("Install", "updated", ("install_id",)),
        ),
        Schema(
            op.DELETE_INSTALL.value,
            "Permanently delete an install.",
            (_uuid("install_id", "Install ID"),),
            Mutation("Install", "deleted", ("install_id",)),
        ),
        # --- domains ---
        Schema(
            op.LIST_DOMAINS.value,
            "List domains attached to an install.",
            (_uuid("install_id", "Install ID"), *_paging()),
        ),
        Schema(
            op.GET_DOMAIN.value,
            "Get one domain of an install.",
            (_uuid("install_id", "Install ID"), _uuid("domain_id", "Domain ID")),
        ),
        Schema(
            op.CREATE_DOMAIN.value,
            "Add a domain to an install.",
            (
                _uuid("install_id", "Install ID"),
                Field(
                    "name",
                    "string",
                    description="Domain name, e.g. www.example.com",
                    required=True,
                    pattern=DOMAIN_PATTERN,
                    pattern_message="Invalid domain name format",
                ),
                Field("primary", "boolean", description="Make this the primary domain"),
                _uuid("redirect_to", "Domain ID to redirect this domain to", required=False),
            ),
            Mutation("Domain", "created", ("name",)),
        ),
        Schema(
            op.UPDATE_DOMAIN.value,
            "Change primary, redirect, or secure-URL settings of a domain.",
            (
                _uuid("install_id", "Install ID"),
                _uuid("domain_id", "Domain ID"),
                Field("primary", "boolean", description="Make this the primary domain"),
                Field("redirect_to", "string", description="Redirect target domain"),
                Field("secure_all_urls", "boolean", description="Force HTTPS for all URLs"),
            ),
            Mutation("Domain", "updated", ("domain_id",)),
        ),
        Schema(
            op.DELETE_DOMAIN.value,
            "Remove a domain from an install.",
            (_uuid("install_id", "Install ID"), _uuid("domain_id", "Domain ID")),
            Mutation("Domain", "deleted", ("domain_id",)),
        ),
        # --- backups / cache ---
        Schema(
            op.CREATE_BACKUP.value,
            "Request a backup checkpoint of an install.",
            (
                _uuid("install_id", "Install ID"),
                Field(
                    "description", "string", description="Backup description",
                    required=True, min_length=1, max_length=200,
                ),
                Field(
                    "notification_emails",
                    "array",
                    description="Addresses notified when the backup completes",
                    required=True,
                    min_items=1,
                    max_items=10,
                    items=Field(
                        "email", "string", pattern=EMAIL_PATTERN,
                        pattern_message="Invalid email format",
                    ),
                ),
            ),
            Mutation("Backup", "created", ("description",)),
        ),
        Schema(
            op.GET_BACKUP.value,
            "Get the status of a backup.",
            (_uuid("install_id", "Install ID"), _uuid("backup_id", "Backup ID")),
        ),
        Schema(
            op.PURGE_CACHE.value,
            "Purge an install's cache.",
            (
                _uuid("install_id", "Install ID"),
                Field(
                    "type", "enum", description="Cache layer to purge",
                    required=True, choices=VALID_CACHE_TYPES,
                ),
            ),
            Mutation("Cache", "purged", ("type",)),
        ),
        # --- account users ---
        Schema(
            op.LIST_ACCOUNT_USERS.value,
            "List users of an account.",
            (_uuid("account_id", "Account ID"),),
        ),
        Schema(
            op.GET_ACCOUNT_USER.value,
            "Get one user of an account.",
            (_uuid("account_id", "Account ID"), _uuid("user_id", "User ID")),
        ),
        Schema(
            op.CREATE_ACCOUNT_USER.value,
            "Invite a user to an account.",
            (
                _uuid("account_id", "Account ID"),
                Field(
                    "first_name", "string", description="First name",
                    required=True, min_length=1, max_length=50,
                ),
                Field(
                    "last_name", "string", description="Last name",
                    required=True, min_length=1, max_length=50,
                ),
                Field(
                    "email", "string", description="Email address", required=True,
                    pattern=EMAIL_PATTERN, pattern_message="Invalid email format",
                ),
                _ROLES,
                _install_ids(),
            ),
            Mutation("Account user", "created", ("email",)),
        ),
        Schema(
            op.UPDATE_ACCOUNT_USER.value,
            "Change a user's roles or install access.",
            (
                _uuid("account_id", "Account ID"),
                _uuid("user_id", "User ID"),
                _ROLES,
                _install_ids(),
            ),
            Mutation("Account user", "updated", ("user_id",)),
        ),
        Schema(
            op.DELETE_ACCOUNT_USER.value,
            "Remove a user from an account.",
            (_uuid("account_id", "Account ID"), _uuid("user_id", "User ID")),
            Mutation("Account user", "deleted", ("user_id",)),
        ),
        # --- SSH keys ---
        Schema(op.LIST_SSH_KEYS.value, "List SSH keys of the current user.", _paging()),
        Schema(
            op.CREATE_SSH_KEY.value,
            "Add an SSH public key for git push and SFTP/SSH gateway access.",
            (
                Field(
                    "public_key", "string", description="OpenSSH public key",
                    required=True, min_length=100, max_length=2000,
                ),
            ),
            Mutation("SSH key", "created"),
        ),
        Schema(
            op.DELETE_SSH_KEY.value,
            "Remove an SSH key.",
            (_uuid("ssh_key_id", "SSH key ID"),),
            Mutation("SSH key", "deleted", ("ssh_key_id",)),
        ),
    ]


def build_registry() -> SchemaRegistry:
    """Build and freeze the full tool catalog."""
    registry = SchemaRegistry(_catalog())
    missing = {o.value for o in Operation} - set(registry.names())
    extra = set(registry.names()) - {o.value for o in Operation}
    if missing or extra:
        raise RuntimeError(
            f"Schema catalog out of sync with Operation: missing={sorted(missing)} "
            f"extra={sorted(extra)}"
        )
    return registry.freeze()
