import pandas as pd

from recon_match import (
    build_summary,
    find_ambiguous_matches,
    find_matches,
    find_one_to_one_matches,
    standardize_invoices,
    standardize_transactions,
    suggest_configuration_adjustments,
)


def test_pipeline_smoke():
    invoices_df = pd.DataFrame([
        {"id": "INV-001", "amount": 1500.0, "date": "2024-01-15", "customer_id": "CUST-001",
         "customer_name": "Acme Corporation", "reference_id": "INV-2024-001",
         "description": "Monthly retainer services"},
        {"id": "INV-002", "amount": 2500.5, "date": "2024-03-20", "customer_id": "CUST-002",
         "customer_name": "Tech Solutions Inc", "reference_id": "INV-2024-002",
         "description": "Software development services"},
    ])
    transactions_df = pd.DataFrame([
        {"id": "TXN-001", "amount": 1500.0, "date": "2024-01-18",
         "description": "ACME CORPORATION INV-2024-001 retainer", "source": "bank"},
        {"id": "TXN-002", "amount": 2500.5, "date": "2024-03-22",
         "description": "Tech Solutions INV-2024-002 software", "source": "payment_processor"},
    ])

    invoices, inv_ex = standardize_invoices(invoices_df)
    transactions, txn_ex = standardize_transactions(transactions_df)
    assert inv_ex.empty and txn_ex.empty

    matches = find_matches(invoices, transactions)
    pairs = {m.pair for m in find_one_to_one_matches(matches)}

    assert ("INV-001", "TXN-001") in pairs
    assert ("INV-002", "TXN-002") in pairs
    assert find_ambiguous_matches(matches) == []

    summary = build_summary(matches)
    assert summary["total_candidates"] == 2

    matched_invoices = {m.invoice_id for m in matches}
    matched_txns = {m.transaction_id for m in matches}
    hints = suggest_configuration_adjustments(
        matches,
        len(invoices) - len(matched_invoices),
        len(transactions) - len(matched_txns),
    )
    assert all(h.factor in ("amount", "date", "reference") for h in hints)
