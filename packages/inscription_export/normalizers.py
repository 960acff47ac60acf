"""Raw OKLink DTOs → domain records.

Coercion helpers turn the explorer's string-encoded numbers into exact Python
values:

- amounts: decimal-integer strings → ``int`` (arbitrary precision)
- timestamps: unix **milliseconds** → timezone-aware UTC ``datetime``
- page counters: integer strings → ``int``

Only ASCII digits are accepted. ``int()`` on its own would also take
whitespace, underscores, signs and non-ASCII digits, none of which the API is
expected to send.

Normalization is all-or-nothing: the first invalid field aborts the record,
the first invalid record aborts the page.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

from .errors import CoercionError, MissingPaginationError
from .logging_setup import get_logger
from .models import (
    ActionKind,
    Inscription,
    InscriptionRaw,
    Page,
    PaginationRaw,
    ResponseRaw,
    TokenStandard,
    TransactionStatus,
)

_DIGITS_RE = re.compile(r"[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_logger = get_logger("inscription_export.normalizers")

# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _digits(raw: str, what: str) -> int:
    if not _DIGITS_RE.fullmatch(raw):
        raise CoercionError(f"invalid {what}: {raw!r}")
    try:
        return int(raw)
    except ValueError as e:  # exceeds sys.get_int_max_str_digits()
        raise CoercionError(f"invalid {what}: too many digits") from e


def parse_amount(raw: str) -> int:
    """Parse a non-negative decimal-integer amount without precision loss."""

    return _digits(raw, "amount")


def parse_timestamp_ms(raw: str) -> datetime:
    """Parse a unix timestamp in milliseconds into a UTC ``datetime``.

    Uses integer ``timedelta`` arithmetic (no float seconds) so the result is
    exact to the millisecond.
    """

    ms = _digits(raw, "timestamp")
    try:
        return _EPOCH + timedelta(milliseconds=ms)
    except OverflowError as e:
        raise CoercionError(f"timestamp out of range: {raw!r}") from e


def parse_counter(raw: str, field: str) -> int:
    """Parse a page counter (``page``/``totalPage``)."""

    return _digits(raw, field)


# ---------------------------------------------------------------------------
# Record / page / response
# ---------------------------------------------------------------------------


def normalize_inscription(raw: InscriptionRaw) -> Inscription:
    """Convert one raw explorer record into an :class:`Inscription`.

    Fields are validated in a fixed order (action, amount, time, state, token
    type); the first failure propagates. Addresses, ids, the ticker and the tx
    hash are copied verbatim.
    """

    action = ActionKind.parse(raw.action_type)
    amount = parse_amount(raw.amount)
    timestamp = parse_timestamp_ms(raw.time)
    TransactionStatus.parse(raw.state)
    token_type = TokenStandard.parse(raw.token_type)
    return Inscription(
        action=action,
        amount=amount,
        timestamp=timestamp,
        from_address=raw.from_address,
        inscription_id=raw.inscription_id,
        to_address=raw.to_address,
        token=raw.token,
        token_type=token_type,
        tx_id=raw.tx_id,
    )


def normalize_page(raw: PaginationRaw) -> Page:
    """Normalize every record of a pagination block, preserving order."""

    inscriptions = tuple(normalize_inscription(r) for r in raw.inscriptions_list)
    page = parse_counter(raw.page, "page")
    total_pages = parse_counter(raw.total_page, "totalPage")
    for ins in inscriptions:
        _logger.debug("%s", ins)
    return Page(inscriptions=inscriptions, page=page, total_pages=total_pages)


def normalize_response(raw: ResponseRaw) -> Page:
    """Normalize the first (and only expected) pagination block."""

    if not raw.data:
        raise MissingPaginationError("no pagination found")
    return normalize_page(raw.data[0])


__all__ = [
    "normalize_inscription",
    "normalize_page",
    "normalize_response",
    "parse_amount",
    "parse_counter",
    "parse_timestamp_ms",
]
