from typing import List, Sequence

import pandas as pd

from .models import Invoice, Transaction
from .utils import clean_text, coerce_amount, coerce_date

INVOICE_REQUIRED = ["id", "amount", "date", "customer_id", "customer_name"]
INVOICE_OPTIONAL = ["reference_id", "description", "due_date", "status"]

TRANSACTION_REQUIRED = ["id", "amount", "date", "description"]
TRANSACTION_OPTIONAL = ["reference", "source", "status"]


def _require(df: pd.DataFrame, required: Sequence[str], kind: str) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required {kind} columns: {missing}")


def _split(df: pd.DataFrame, required: Sequence[str], optional: Sequence[str],
           kind: str, text_col: str) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Coerces dates/amounts and splits rows into (clean, exceptions).
    Amounts must be positive: scoring works on percentage differences.
    """
    out = df.copy()
    out.columns = [str(c).strip() for c in out.columns]
    _require(out, required, kind)
    for col in optional:
        if col not in out.columns:
            out[col] = None

    out["id"] = out["id"].apply(clean_text)
    out["date"] = coerce_date(out["date"])
    out["amount"] = coerce_amount(out["amount"])
    out[text_col] = out[text_col].apply(clean_text)

    bad_id = out["id"] == ""
    bad_date = out["date"].isna()
    bad_amount = out["amount"].isna() | (out["amount"] <= 0)
    bad_text = out[text_col] == ""

    bad_mask = bad_id | bad_date | bad_amount | bad_text
    exceptions = out.loc[bad_mask].copy()
    exceptions["exception_reason"] = ""
    exceptions.loc[bad_id[bad_mask], "exception_reason"] += "bad_id;"
    exceptions.loc[bad_date[bad_mask], "exception_reason"] += "bad_date;"
    exceptions.loc[bad_amount[bad_mask], "exception_reason"] += "bad_amount;"
    exceptions.loc[bad_text[bad_mask], "exception_reason"] += f"bad_{text_col};"

    return out.loc[~bad_mask].copy(), exceptions


def _optional_date(value):
    ts = pd.to_datetime(value, errors="coerce")
    return None if pd.isna(ts) else ts.normalize()


def standardize_invoices(df: pd.DataFrame) -> tuple[List[Invoice], pd.DataFrame]:
    clean, exceptions = _split(df, INVOICE_REQUIRED, INVOICE_OPTIONAL, "invoice", "customer_name")

    invoices = [
        Invoice(
            id=r["id"],
            amount=float(r["amount"]),
            date=r["date"],
            customer_id=clean_text(r["customer_id"]),
            customer_name=r["customer_name"],
            reference_id=clean_text(r["reference_id"]) or None,
            description=clean_text(r["description"]) or None,
            due_date=_optional_date(r["due_date"]),
            status=clean_text(r["status"]) or None,
        )
        for r in clean.to_dict("records")
    ]
    return invoices, exceptions


def standardize_transactions(df: pd.DataFrame) -> tuple[List[Transaction], pd.DataFrame]:
    clean, exceptions = _split(df, TRANSACTION_REQUIRED, TRANSACTION_OPTIONAL, "transaction", "description")

    transactions = [
        Transaction(
            id=r["id"],
            amount=float(r["amount"]),
            date=r["date"],
            description=r["description"],
            reference=clean_text(r["reference"]) or None,
            source=clean_text(r["source"]) or "bank",
            status=clean_text(r["status"]) or None,
        )
        for r in clean.to_dict("records")
    ]
    return transactions, exceptions
