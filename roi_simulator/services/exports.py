"""
CSV export of the yearly projection.

Produces CSV text only; writing or downloading the file is up to the caller.
"""

import csv
import io
from typing import Any, Dict, Iterable, List

from roi_simulator.calculations.cashflow import YearRow

PROJECTION_COLUMNS = [
    "Year",
    "Scale",
    "Revenue",
    "GrossProfit",
    "LaborCost",
    "Shrink",
    "OperatingProfit",
    "BaselineOp",
    "Compliance",
    "Fee",
    "IncrementalCF",
]


def year_rows_to_records(rows: Iterable[YearRow]) -> List[Dict[str, Any]]:
    """Map YearRows onto the export column names."""
    return [
        {
            "Year": row.year,
            "Scale": row.scale,
            "Revenue": row.improved.revenue,
            "GrossProfit": row.improved.gross_profit,
            "LaborCost": row.improved.labor_cost,
            "Shrink": row.improved.shrink,
            "OperatingProfit": row.improved.operating_profit,
            "BaselineOp": row.baseline_operating_profit,
            "Compliance": row.compliance,
            "Fee": row.fee,
            "IncrementalCF": row.incremental_cash_flow,
        }
        for row in rows
    ]


def write_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    w.writeheader()
    for r in rows:
        w.writerow({k: r.get(k) for k in columns})
    return buf.getvalue()


def write_projection_csv(rows: Iterable[YearRow]) -> str:
    return write_csv(year_rows_to_records(rows), PROJECTION_COLUMNS)
