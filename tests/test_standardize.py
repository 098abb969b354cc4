import pandas as pd
import pytest

from recon_match.standardize import standardize_invoices, standardize_transactions


def test_invoices_clean_and_exceptions():
    df = pd.DataFrame([
        {"id": "INV-1", "amount": "1500.00", "date": "2024-01-15", "customer_id": "C1",
         "customer_name": "Acme Corporation", "reference_id": "INV-2024-001"},
        {"id": "INV-2", "amount": "0", "date": "2024-01-20", "customer_id": "C2",
         "customer_name": "Tech Solutions Inc", "reference_id": None},
        {"id": "INV-3", "amount": "750", "date": "not a date", "customer_id": "C3",
         "customer_name": "Digital Marketing Agency", "reference_id": None},
    ])

    invoices, exceptions = standardize_invoices(df)

    assert [i.id for i in invoices] == ["INV-1"]
    inv = invoices[0]
    assert inv.amount == 1500.0
    assert inv.date == pd.Timestamp("2024-01-15")
    assert inv.reference_id == "INV-2024-001"
    assert inv.description is None
    assert inv.due_date is None

    reasons = dict(zip(exceptions["id"], exceptions["exception_reason"]))
    assert reasons == {"INV-2": "bad_amount;", "INV-3": "bad_date;"}


def test_transactions_defaults():
    df = pd.DataFrame({
        " id ": ["T-1", "T-2"],
        "amount": [1500.0, 20.0],
        "date": ["2024-01-16", "2024-01-17"],
        "description": ["ACME CORP PAYMENT INV-2024-001", "   "],
    })

    transactions, exceptions = standardize_transactions(df)

    assert len(transactions) == 1
    t = transactions[0]
    assert t.source == "bank"
    assert t.reference is None
    assert t.description == "ACME CORP PAYMENT INV-2024-001"
    assert exceptions["exception_reason"].tolist() == ["bad_description;"]


def test_missing_columns():
    with pytest.raises(ValueError, match="customer_name"):
        standardize_invoices(pd.DataFrame({"id": ["I"], "amount": [1], "date": ["2024-01-01"], "customer_id": ["C"]}))
