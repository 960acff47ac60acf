"""Thin blocking client for the OKLink BTC inscription transaction list.

``GET`` against the explorer endpoint with ``page``/``limit``/``address``
query parameters and the ``Ok-Access-Key`` header. Returns the raw body text;
:func:`decode_response` turns it into the typed envelope.

There are no retries. A socket timeout is applied only when
``OKLINK_HTTP_TIMEOUT`` is set.
"""

from __future__ import annotations

import http.client
import os
import urllib.error
import urllib.parse
import urllib.request

from pydantic import ValidationError

from .errors import DecodeError, TransportError
from .logging_setup import get_logger
from .models import ResponseRaw

OKLINK_API_URL = "https://www.oklink.com/api/v5/explorer/btc/transaction-list"
PAGE_SIZE = 50

_logger = get_logger("inscription_export.oklink_client")


def _api_url() -> str:
    override = os.getenv("OKLINK_API_URL")
    if override and override.strip():
        return override.strip()
    return OKLINK_API_URL


def _timeout() -> float | None:
    raw = os.getenv("OKLINK_HTTP_TIMEOUT")
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        _logger.warning("ignoring invalid OKLINK_HTTP_TIMEOUT=%r", raw)
        return None
    return value if value > 0 else None


def build_request(
    api_key: str, address: str, page: int, *, limit: int = PAGE_SIZE
) -> urllib.request.Request:
    """Build the ``GET`` request for one 1-based ``page``."""

    query = urllib.parse.urlencode({"page": page, "limit": limit, "address": address})
    req = urllib.request.Request(f"{_api_url()}?{query}", method="GET")
    req.add_header("Ok-Access-Key", api_key)
    req.add_header("Content-Type", "application/json")
    return req


def get_transaction_list(api_key: str, address: str, page: int, *, limit: int = PAGE_SIZE) -> str:
    """Fetch one page of the wallet's inscription history and return the body.

    Raises :class:`TransportError` on a non-2xx status, a connection failure
    or a truncated body, and :class:`DecodeError` when the body is not UTF-8.
    """

    req = build_request(api_key, address, page, limit=limit)
    timeout = _timeout()
    try:
        if timeout is None:
            resp_cm = urllib.request.urlopen(req)
        else:
            resp_cm = urllib.request.urlopen(req, timeout=timeout)
        with resp_cm as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        try:
            err_body = e.read().decode("utf-8", errors="replace")
        except (OSError, http.client.HTTPException):
            err_body = ""
        raise TransportError(
            f"OKLink API error: {e.code} {e.reason}: {err_body}", status=e.code, body=err_body
        ) from e
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        raise TransportError(f"OKLink request failed: {e}") from e

    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"OKLink response is not valid UTF-8: {e}") from e


def decode_response(body: str) -> ResponseRaw:
    """Decode a response body into :class:`ResponseRaw`.

    Malformed JSON and shape mismatches (missing keys, non-string values)
    both raise :class:`DecodeError`.
    """

    try:
        return ResponseRaw.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"unexpected OKLink response: {e}") from e


__all__ = [
    "OKLINK_API_URL",
    "PAGE_SIZE",
    "build_request",
    "decode_response",
    "get_transaction_list",
]
