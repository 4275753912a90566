"""
Shopify Admin REST API helpers.

This module implements the low-level requests used by the theme migration:
authenticated GETs returning parsed JSON and authenticated PUTs with a JSON
body.  Nothing here raises on HTTP or network failures; each call returns a
:class:`~src.utils.errors.Result` and prints the failure, leaving the caller
to decide whether it is fatal.

A simple rate limiter is included to stay within Shopify's REST limit of
two requests per second per store.  Requests are never retried.

Usage example::

    from src.migrators.shopify_client import query

    result = query("https://shop.myshopify.com/admin/api/2024-01/", token, "themes.json")
    if result.ok:
        themes = result.value["themes"]
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

import requests

from src.utils.errors import HTTP_STATUS, NETWORK, PARSE, Result

DEFAULT_TIMEOUT = 30.0


class RateLimiter:
    """
    Simple time-based rate limiter.  Ensures that no more than ``rpm``
    requests are dispatched per minute.
    """

    def __init__(self, rpm: int = 120) -> None:
        self.rpm = max(1, rpm)
        self.interval = 60.0 / float(self.rpm)
        self._last = 0.0

    def wait(self, time_fn: Callable[[], float] = time.time, sleep_fn: Callable[[float], None] = time.sleep) -> None:
        now = time_fn()
        dt = now - self._last
        if dt < self.interval:
            sleep_fn(self.interval - dt)
        self._last = time_fn()


_limiter = RateLimiter(120)


def set_rate_limit(rpm: int) -> None:
    """Replace the shared limiter used by :func:`query` and :func:`put_json`."""
    global _limiter
    _limiter = RateLimiter(rpm)


def shopify_headers(token: str) -> Dict[str, str]:
    """
    Construct the headers required for Shopify Admin API requests.

    :param token: The store's Admin API access token.
    :return: A dictionary of headers including ``X-Shopify-Access-Token``.
    """
    return {
        "X-Shopify-Access-Token": token,
        "Content-Type": "application/json",
    }


def build_url(domain: str, endpoint: str) -> str:
    """Join an admin base URL and a relative endpoint with a single slash."""
    return f"{domain.rstrip('/')}/{endpoint.lstrip('/')}"


def query(domain: str, token: str, endpoint: str, *, timeout: float = DEFAULT_TIMEOUT) -> Result[Dict[str, Any]]:
    """
    Send an authenticated GET to ``endpoint`` and return the parsed body.

    :param domain: Base admin API URL of the store.
    :param token: Admin API access token.
    :param endpoint: Relative path such as ``themes.json``.
    :return: ``Result`` holding the decoded JSON object on success.
    """
    _limiter.wait()
    url = build_url(domain, endpoint)
    try:
        resp = requests.get(url, headers=shopify_headers(token), timeout=timeout)
    except requests.RequestException as e:
        print(f"Error fetching {endpoint}: {e}")
        return Result.failure(NETWORK, f"Error fetching {endpoint}: {e}")

    if not resp.ok:
        message = f"Error fetching {endpoint}: {resp.reason}"
        print(message)
        return Result.failure(HTTP_STATUS, message)

    try:
        return Result.success(resp.json())
    except ValueError as e:
        message = f"Error parsing {endpoint}: {e}"
        print(message)
        return Result.failure(PARSE, message)


def put_json(
    domain: str,
    token: str,
    endpoint: str,
    payload: Dict[str, Any],
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> Result[Optional[Dict[str, Any]]]:
    """
    Send an authenticated PUT with a JSON body.

    On a non-success status the response text is included in the failure
    message, since Shopify explains validation errors there.

    :return: ``Result`` holding the decoded response body, or ``None`` if the
        body is not JSON.
    """
    _limiter.wait()
    url = build_url(domain, endpoint)
    try:
        resp = requests.put(url, headers=shopify_headers(token), json=payload, timeout=timeout)
    except requests.RequestException as e:
        return Result.failure(NETWORK, f"{e}")

    if not resp.ok:
        return Result.failure(HTTP_STATUS, f"{resp.status_code} - {resp.text}")

    try:
        return Result.success(resp.json())
    except ValueError:
        return Result.success(None)
