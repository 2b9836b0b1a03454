"""
Translation operation registrations.

Registers the nine Verba project/key/locale/translation operations. Each
handler maps validated arguments onto exactly one backend call; all other
behavior (key format, the 20-key translate limit, owner-only actions) is
enforced by the backend.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

from pydantic import BaseModel

from ...client.verba_client import BackendResult, VerbaClient
from ..operation_registry import (
    OperationDescriptor,
    OperationRegistry,
    ParamSpec,
    ParamType,
)

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_KEY_SAFE_CHARS = "!*'()"


# ============================================================================
# Path Helpers
# ============================================================================

def encode_key(key: str) -> str:
    """Percent-encode a translation key for use as a single path segment."""
    return quote(key, safe=_KEY_SAFE_CHARS)


def format_query_value(value: Any) -> str:
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_query_string(params: Sequence[Tuple[str, Any]]) -> str:
    """
    Build "?a=1&b=2" from (name, value) pairs, skipping unset values.

    None, empty strings, zero and False are treated as not supplied.
    Returns an empty string when nothing remains.
    """
    pairs = [(name, format_query_value(value)) for name, value in params if value]
    if not pairs:
        return ""
    return "?" + urlencode(pairs)


def _without_none(body: dict) -> dict:
    return {name: value for name, value in body.items() if value is not None}


# ============================================================================
# Operation Handlers
# ============================================================================

async def list_projects_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    return await client.call("GET", "/projects")


async def get_project_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    return await client.call("GET", f"/projects/{args.projectId}")


async def list_keys_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    """List keys, forwarding only the filters the caller supplied."""
    query = build_query_string([
        ("search", args.search),
        ("locale", args.locale),
        ("untranslated", args.untranslated),
        ("page", args.page),
        ("pageSize", args.pageSize),
    ])
    return await client.call("GET", f"/projects/{args.projectId}/keys{query}")


async def add_key_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    return await client.call(
        "POST",
        f"/projects/{args.projectId}/keys",
        {"key": args.key, "defaultValue": args.defaultValue}
    )


async def set_translation_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    path = (
        f"/projects/{args.projectId}/keys/{encode_key(args.key)}"
        f"/translations/{args.locale}"
    )
    return await client.call("PUT", path, {"value": args.value})


async def translate_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    """Request AI translation; targetLocales is left out when not given."""
    body = _without_none({"keys": args.keys, "targetLocales": args.targetLocales})
    return await client.call("POST", f"/projects/{args.projectId}/translate", body)


async def list_untranslated_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    query = build_query_string([
        ("untranslated", True),
        ("locale", args.locale),
    ])
    return await client.call("GET", f"/projects/{args.projectId}/keys{query}")


async def add_locale_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    return await client.call(
        "POST",
        f"/projects/{args.projectId}/locales",
        {"locale": args.locale}
    )


async def delete_key_handler(client: VerbaClient, args: BaseModel) -> BackendResult:
    return await client.call(
        "DELETE",
        f"/projects/{args.projectId}/keys/{encode_key(args.key)}"
    )


# ============================================================================
# Operation Descriptors
# ============================================================================

PROJECT_ID = ParamSpec("projectId", ParamType.STRING, "The project ID")

LIST_PROJECTS = OperationDescriptor(
    name="list_projects",
    description="List all translation projects",
    handler=list_projects_handler,
)

GET_PROJECT = OperationDescriptor(
    name="get_project",
    description="Get project details including locales and key count",
    handler=get_project_handler,
    params=(PROJECT_ID,),
)

LIST_KEYS = OperationDescriptor(
    name="list_keys",
    description="List translation keys with optional search, locale filter, and pagination",
    handler=list_keys_handler,
    params=(
        PROJECT_ID,
        ParamSpec("search", ParamType.STRING, "Search in key names and values", required=False),
        ParamSpec("locale", ParamType.STRING, "Filter by locale", required=False),
        ParamSpec(
            "untranslated", ParamType.BOOLEAN,
            "Only show keys with missing translations", required=False
        ),
        ParamSpec("page", ParamType.NUMBER, "Page number (default 1)", required=False),
        ParamSpec(
            "pageSize", ParamType.NUMBER,
            "Results per page (default 50, max 100)", required=False
        ),
    ),
)

ADD_KEY = OperationDescriptor(
    name="add_key",
    description=(
        "Add a new translation key with a default value. "
        "Automatically AI-translates to all project locales."
    ),
    handler=add_key_handler,
    params=(
        PROJECT_ID,
        ParamSpec(
            "key", ParamType.STRING,
            "Translation key (letters, numbers, underscores, dots; must start with a letter)"
        ),
        ParamSpec(
            "defaultValue", ParamType.STRING,
            "The default translation value in the project's default locale"
        ),
    ),
)

SET_TRANSLATION = OperationDescriptor(
    name="set_translation",
    description=(
        "Set or update a translation value for a specific key and locale. "
        "Marks as manually translated."
    ),
    handler=set_translation_handler,
    params=(
        PROJECT_ID,
        ParamSpec("key", ParamType.STRING, "The translation key"),
        ParamSpec("locale", ParamType.STRING, "The locale code (e.g. es, fr, de)"),
        ParamSpec("value", ParamType.STRING, "The translation value"),
    ),
)

TRANSLATE = OperationDescriptor(
    name="translate",
    description="AI-translate one or more keys to target locales. Max 20 keys per request.",
    handler=translate_handler,
    params=(
        PROJECT_ID,
        ParamSpec("keys", ParamType.STRING_ARRAY, "Array of key names to translate"),
        ParamSpec(
            "targetLocales", ParamType.STRING_ARRAY,
            "Specific locales to translate to (defaults to all non-default locales)",
            required=False
        ),
    ),
)

LIST_UNTRANSLATED = OperationDescriptor(
    name="list_untranslated",
    description=(
        "List keys that have missing translations, "
        "optionally filtered to a specific locale"
    ),
    handler=list_untranslated_handler,
    params=(
        PROJECT_ID,
        ParamSpec(
            "locale", ParamType.STRING,
            "Only show keys missing this specific locale", required=False
        ),
    ),
)

ADD_LOCALE = OperationDescriptor(
    name="add_locale",
    description="Add a new locale to a project (owner only)",
    handler=add_locale_handler,
    params=(
        PROJECT_ID,
        ParamSpec("locale", ParamType.STRING, "BCP-47 locale code (e.g. es, fr, pt-BR, zh-CN)"),
    ),
)

DELETE_KEY = OperationDescriptor(
    name="delete_key",
    description="Delete a translation key from a project (owner only)",
    handler=delete_key_handler,
    params=(
        PROJECT_ID,
        ParamSpec("key", ParamType.STRING, "The translation key to delete"),
    ),
)

TRANSLATION_OPERATIONS: List[OperationDescriptor] = [
    LIST_PROJECTS,
    GET_PROJECT,
    LIST_KEYS,
    ADD_KEY,
    SET_TRANSLATION,
    TRANSLATE,
    LIST_UNTRANSLATED,
    ADD_LOCALE,
    DELETE_KEY,
]


def register_translation_operations(registry: Optional[OperationRegistry] = None) -> OperationRegistry:
    """
    Register all translation operations.

    Args:
        registry: Registry to fill (a new one is created when omitted)

    Returns:
        The filled registry
    """
    if registry is None:
        registry = OperationRegistry()

    registry.register_all(TRANSLATION_OPERATIONS)
    logger.info(f"Registered {len(TRANSLATION_OPERATIONS)} translation operations")
    return registry
