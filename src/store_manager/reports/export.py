"""Flat exports of report rows (CSV and Excel)."""

from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

from ..common.money import from_minor_units
from .service import PaymentsReport

PAYMENT_COLUMNS = ["Date", "Employee", "Amount", "Currency", "Method", "Notes"]


def payment_rows(report: PaymentsReport) -> list[dict]:
    return [
        {
            "Date": p.paid_date.strftime("%Y-%m-%d"),
            "Employee": report.employee_names.get(p.employee_id, f"#{p.employee_id}"),
            "Amount": f"{from_minor_units(p.amount_paid):.2f}",
            "Currency": p.currency.value,
            "Method": p.payment_method.value,
            "Notes": p.notes or "",
        }
        for p in report.payments
    ]


def to_csv_bytes(rows: Sequence[dict], columns: Sequence[str]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(columns))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    # BOM so Excel opens it as UTF-8
    return out.getvalue().encode("utf-8-sig")


def to_xlsx_bytes(rows: Sequence[dict], columns: Sequence[str], *, sheet_name: str) -> bytes:
    df = pd.DataFrame(list(rows), columns=list(columns))
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()
