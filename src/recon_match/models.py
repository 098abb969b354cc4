from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Optional, Union

DateLike = Union[date, datetime, str]

InvoiceStatus = Literal["pending", "partial", "reconciled"]
TransactionStatus = Literal["pending", "reconciled"]
TransactionSource = Literal["bank", "payment_processor", "manual"]


@dataclass(frozen=True)
class Invoice:
    id: str
    amount: float
    date: DateLike
    customer_id: str
    customer_name: str
    reference_id: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[DateLike] = None
    status: Optional[InvoiceStatus] = None


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float
    date: DateLike
    description: str
    reference: Optional[str] = None
    source: TransactionSource = "bank"
    status: Optional[TransactionStatus] = None


@dataclass(frozen=True)
class MatchBreakdown:
    amount_difference: float
    date_difference: int          # whole days
    amount_match: bool
    date_in_window: bool
    reference_similarity: float


@dataclass(frozen=True)
class MatchCandidate:
    invoice_id: str
    transaction_id: str
    confidence_score: float
    amount_score: float
    date_score: float
    reference_score: float
    breakdown: MatchBreakdown

    @property
    def pair(self) -> tuple:
        return (self.invoice_id, self.transaction_id)
