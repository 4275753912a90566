"""
Theme and asset-list lookups against a store.

Themes are selected by predicate: the first theme in API order whose role
or name matches wins.  There is no further tie-break.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import ValidationError

from models.shopify_theme import Asset, AssetsResponse, Theme, ThemesResponse
from src.migrators.shopify_client import DEFAULT_TIMEOUT, query
from src.utils.errors import CONFIG, NOT_FOUND, PARSE, Result


def fetch_themes(domain: str, token: str, *, timeout: float = DEFAULT_TIMEOUT) -> Result[List[Theme]]:
    """Return every theme of the store, in the order the API lists them."""
    resp = query(domain, token, "themes.json", timeout=timeout)
    if not resp.ok:
        return Result.failure(resp.kind, resp.message)
    try:
        parsed = ThemesResponse.model_validate(resp.value)
    except ValidationError as e:
        return Result.failure(PARSE, f"Unexpected themes.json payload: {e}")
    return Result.success(parsed.themes)


def find_theme(themes: Iterable[Theme], *, role: Optional[str] = None, name: Optional[str] = None) -> Optional[Theme]:
    """Return the first theme matching ``role`` and/or ``name``, or ``None``."""
    if role is None and name is None:
        raise ValueError("find_theme needs a role or a name")
    for theme in themes:
        if role is not None and theme.role != role:
            continue
        if name is not None and theme.name != name:
            continue
        return theme
    return None


def resolve_theme(
    domain: str,
    token: str,
    *,
    role: Optional[str] = None,
    name: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Result[Theme]:
    """
    Fetch the store's themes and select one by role or name.

    :return: ``Result`` with the matching :class:`Theme`.  Fails with
        ``CONFIG`` when the store is not configured and ``NOT_FOUND`` when no
        theme matches.
    """
    if not domain or not token:
        return Result.failure(CONFIG, "Store URL or access token is not defined")

    themes = fetch_themes(domain, token, timeout=timeout)
    if not themes.ok:
        return Result.failure(themes.kind, themes.message)

    theme = find_theme(themes.value, role=role, name=name)
    if theme is None:
        wanted = f"role '{role}'" if role is not None else f"name '{name}'"
        return Result.failure(NOT_FOUND, f"No theme with {wanted} found")
    return Result.success(theme)


def fetch_assets(domain: str, token: str, theme_id: int, *, timeout: float = DEFAULT_TIMEOUT) -> Result[List[Asset]]:
    """Return the asset list of ``theme_id``, preserving API order."""
    resp = query(domain, token, f"themes/{theme_id}/assets.json", timeout=timeout)
    if not resp.ok:
        return Result.failure(resp.kind, resp.message)
    try:
        parsed = AssetsResponse.model_validate(resp.value)
    except ValidationError as e:
        return Result.failure(PARSE, f"Unexpected assets.json payload: {e}")
    return Result.success(parsed.assets)
