"""Domain models and raw API DTOs for ``inscription_export``.

Two layers live here:

- Raw DTOs (pydantic): the OKLink response envelope exactly as sent. Every
  field is a string on the wire, including numeric ones, and strict mode keeps
  it that way (no silent int/float coercion).
- Domain records (frozen dataclasses and closed enums): what the rest of the
  package works with after normalization.

The enums only know the vocabulary observed so far. Anything else fails to
parse so a new transaction shape surfaces as an error instead of being
exported under the wrong category.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownValueError

# ---------------------------------------------------------------------------
# Closed vocabularies
# ---------------------------------------------------------------------------


class ActionKind(Enum):
    """Inscription action as reported by the explorer (``actionType``)."""

    MINT = "mint"
    TRANSFER = "transfer"

    @classmethod
    def parse(cls, raw: str) -> ActionKind:
        for member in cls:
            if member.value == raw:
                return member
        raise UnknownValueError("action", raw)

    @property
    def label(self) -> str:
        return "Mint" if self is ActionKind.MINT else "Transfer"


class TokenStandard(Enum):
    """Token standard (``tokenType``). Only BRC20 is understood."""

    BRC20 = "BRC20"

    @classmethod
    def parse(cls, raw: str) -> TokenStandard:
        for member in cls:
            if member.value == raw:
                return member
        raise UnknownValueError("token type", raw)

    @property
    def label(self) -> str:
        return self.value


class TransactionStatus(Enum):
    """Terminal transaction state (``state``).

    Only successful transactions are handled. A failed transaction has no
    export path and must stop the run until one is designed.
    """

    SUCCESS = "success"

    @classmethod
    def parse(cls, raw: str) -> TransactionStatus:
        for member in cls:
            if member.value == raw:
                return member
        raise UnknownValueError("state", raw)


class OutputCategory(Enum):
    """CTC transaction type written to the ``Type`` column."""

    BUY = "buy"
    MINT = "mint"

    @classmethod
    def from_action(cls, action: ActionKind) -> OutputCategory:
        if action is ActionKind.MINT:
            return cls.MINT
        # Every transfer is treated as an acquisition; disposals are not
        # represented by the explorer data we receive.
        return cls.BUY


# ---------------------------------------------------------------------------
# Domain records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Inscription:
    """One normalized inscription transaction.

    ``amount`` is a plain ``int`` because token amounts routinely exceed
    64 bits. ``timestamp`` is timezone-aware UTC. The transaction status is
    validated during normalization and not stored.
    """

    action: ActionKind
    amount: int
    timestamp: datetime
    from_address: str
    inscription_id: str
    to_address: str
    token: str
    token_type: TokenStandard
    tx_id: str


@dataclass(frozen=True, slots=True)
class Page:
    """A normalized page of results plus the server-reported counters."""

    inscriptions: tuple[Inscription, ...]
    page: int
    total_pages: int

    @property
    def is_last(self) -> bool:
        return self.page == self.total_pages


@dataclass(frozen=True, slots=True)
class CsvRow:
    """The exported values of one inscription, already formatted as text.

    Field order (exact): timestamp, category, base_currency, base_amount,
    from_address, to_address, hash, description. The constant and
    always-empty columns are added by :meth:`as_record`.
    """

    timestamp: str
    category: str
    base_currency: str
    base_amount: str
    from_address: str
    to_address: str
    hash: str
    description: str

    def as_record(self) -> list[str]:
        """Return the 13 column values in ``CSV_HEADER`` order."""

        return [
            self.timestamp,
            self.category,
            self.base_currency,
            self.base_amount,
            "",  # quote currency
            "",  # quote amount
            "",  # fee currency
            "",  # fee amount
            self.from_address,
            self.to_address,
            BLOCKCHAIN,
            self.hash,
            self.description,
        ]


BLOCKCHAIN = "Bitcoin"


# ---------------------------------------------------------------------------
# Raw OKLink DTOs
# ---------------------------------------------------------------------------


class InscriptionRaw(BaseModel):
    """One element of ``inscriptionsList`` as returned by the explorer."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    action_type: str = Field(alias="actionType")
    amount: str
    from_address: str = Field(alias="fromAddress")
    inscription_id: str = Field(alias="inscriptionId")
    state: str
    time: str
    to_address: str = Field(alias="toAddress")
    token: str
    token_type: str = Field(alias="tokenType")
    tx_id: str = Field(alias="txId")


class PaginationRaw(BaseModel):
    """A pagination block from ``data``.

    ``limit`` and ``totalTransaction`` are unused and may be absent.
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    inscriptions_list: list[InscriptionRaw] = Field(alias="inscriptionsList")
    page: str
    total_page: str = Field(alias="totalPage")
    limit: str | None = None
    total_transaction: str | None = Field(default=None, alias="totalTransaction")


class ResponseRaw(BaseModel):
    """Top-level response envelope."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    data: list[PaginationRaw]


__all__ = [
    "BLOCKCHAIN",
    "ActionKind",
    "CsvRow",
    "Inscription",
    "InscriptionRaw",
    "OutputCategory",
    "Page",
    "PaginationRaw",
    "ResponseRaw",
    "TokenStandard",
    "TransactionStatus",
]
