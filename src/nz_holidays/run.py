"""
Batch entry point for the NZ public holiday payroll check.

Behaviour:
- Reads a CSV of employees and the region they work in
- Writes enriched findings to: outputs/holiday_run/payroll_holiday_check_results.csv
- Generates the Markdown / HTML / (best-effort) PDF report from those findings.

The Streamlit batch section calls the same functions, so outputs stay aligned.
"""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Any, List, Optional

from .service import lookup_region_holidays
from .reporting.public_holiday_report_md import generate_public_holiday_report
from .reporting.html_builder import build_html_and_pdf


# ---------- Paths & defaults ----------

BASE_DIR = Path(__file__).resolve().parents[2]

BATCH_INPUTS_DIR = BASE_DIR / "batch_inputs"
DEFAULT_INPUT_CSV = BATCH_INPUTS_DIR / "example.csv"

HOLIDAY_OUTPUT_DIR = BASE_DIR / "outputs" / "holiday_run"
FINDINGS_CSV_PATH = HOLIDAY_OUTPUT_DIR / "payroll_holiday_check_results.csv"


def _parse_iso_date(value: str | None) -> Optional[date]:
    """Parse a simple YYYY-MM-DD string into a date, or return None."""
    if not value:
        return None
    s = value.strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        return None


def _parse_year(value: Any, default: int) -> int:
    if value is None or str(value).strip() == "":
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def enrich_row(
    idx: int,
    row: Dict[str, Any],
    *,
    year: int,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
) -> Dict[str, Any]:
    """Look up one batch row; row values override the batch defaults."""
    employee_id = row.get("employee_id")
    region = (row.get("region") or "").strip()

    if not region:
        return {
            "row": idx,
            "employee_id": employee_id,
            "error": "Missing region",
        }

    effective_year = _parse_year(row.get("year"), year)
    start = _parse_iso_date(row.get("start_date")) or period_start
    end = _parse_iso_date(row.get("end_date")) or period_end

    r = lookup_region_holidays(region, effective_year, start=start, end=end)

    in_period = r.get("holidays_in_period") or []
    pay_period = r.get("pay_period") or {}

    # Schools aren't payroll events; keep only public + regional days
    paid = [h for h in in_period if h.get("type") != "school"]
    # Engine order groups by type; the findings list them by date with names aligned
    paid.sort(key=lambda h: (h["date"], h["name"]))

    return {
        "row": idx,
        "employee_id": employee_id,
        "input_region": region,
        "region": r.get("region"),
        "region_name": r.get("region_name"),
        "year": effective_year,
        "pay_period_start": pay_period.get("start") or "",
        "pay_period_end": pay_period.get("end") or "",
        "holiday_count_in_period": len(paid),
        "holiday_dates_in_period": "; ".join(h["date"] for h in paid),
        "holiday_names_in_period": "; ".join(h["name"] for h in paid),
        "status": r.get("status"),
        "manual_review": r.get("manual_review"),
        "audit_message": r.get("audit_message"),
        "region_resolution_method": r.get("region_resolution_method"),
        "rules_applied": "; ".join(r.get("rules_applied", [])),
        "matariki_available": r.get("matariki_available"),
    }


# ---------- Core batch runner ----------

def run_holiday_batch(
    input_csv: Path = DEFAULT_INPUT_CSV,
    output_csv: Path = FINDINGS_CSV_PATH,
    year: Optional[int] = None,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
) -> Path:
    """
    Run the payroll holiday check over a CSV.

    Columns expected:
    - employee_id
    - region     (code such as 'hawkes_bay' or a name such as "Hawke's Bay")
    - year       (optional; overrides default year if present)
    - start_date (optional; YYYY-MM-DD)
    - end_date   (optional; YYYY-MM-DD)
    """
    if year is None:
        year = date.today().year

    if not input_csv.exists():
        raise FileNotFoundError(f"Input CSV not found: {input_csv}")

    output_csv.parent.mkdir(parents=True, exist_ok=True)

    with input_csv.open("r", newline="", encoding="utf-8-sig") as f_in:
        reader = csv.DictReader(f_in)
        rows: List[Dict[str, Any]] = list(reader)
        original_fieldnames = reader.fieldnames or []

    enriched_rows: List[Dict[str, Any]] = []
    for idx, row in enumerate(rows):
        try:
            enriched_rows.append(
                enrich_row(idx, row, year=year, period_start=period_start, period_end=period_end)
            )
        except Exception as e:
            enriched_rows.append({
                "row": idx,
                "employee_id": row.get("employee_id"),
                "input_region": row.get("region"),
                "error": str(e),
            })

    # --- Write output CSV ---
    if enriched_rows:
        # Union of keys across rows, first-seen order
        fieldnames: List[str] = list(dict.fromkeys(k for rec in enriched_rows for k in rec))
    else:
        fieldnames = list(original_fieldnames)

    with output_csv.open("w", newline="", encoding="utf-8") as f_out:
        writer = csv.DictWriter(f_out, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(enriched_rows)

    return output_csv


# ---------- CLI entry point ----------

def main() -> None:
    print(f"Running holiday batch using: {DEFAULT_INPUT_CSV}")
    findings_csv = run_holiday_batch()
    print(f"Wrote enriched results to: {findings_csv}")

    report_md_path = generate_public_holiday_report(
        findings_csv=findings_csv,
        output_dir=HOLIDAY_OUTPUT_DIR,
        input_files=[DEFAULT_INPUT_CSV.name],
    )
    print(f"Wrote Markdown report to: {report_md_path}")

    html_path, pdf_path = build_html_and_pdf(
        md_path=report_md_path,
        out_dir=HOLIDAY_OUTPUT_DIR,
        title="NZ Public Holiday Payroll Review",
    )

    print(f"Wrote HTML report to: {html_path}")
    if pdf_path is not None and pdf_path.exists():
        print(f"Wrote PDF report to: {pdf_path}")
    else:
        print("PDF generation skipped (WeasyPrint not available).")


if __name__ == "__main__":
    main()
