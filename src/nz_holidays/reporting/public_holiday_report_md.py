from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


def fmt_date(d: date) -> str:
    return d.strftime("%d %b %Y")


def fmt_iso_date(s: str | None) -> str:
    if not s or not str(s).strip():
        return "—"
    try:
        return date.fromisoformat(str(s).strip()).strftime("%d %b %Y")
    except ValueError:
        return str(s)


DISCLAIMER_BLOCK = (
    "This review lists the **New Zealand public holidays and regional anniversary days** that fall "
    "within each employee's pay period, based on the region recorded as their place of work.\n\n"
    "Regional anniversary days are calculated with simplified rules: several are shown on their "
    "nominal date rather than the Monday on which they are observed. Matariki is only available for "
    "years with a published date.\n\n"
    "This review does **not** calculate pay, time-and-a-half, or alternative holidays under the "
    "Holidays Act 2003. Findings represent potential areas for review only."
)

STATUS_ORDER = [
    "ERROR",
    "UNKNOWN_REGION",
    "RULES_MISSING",
    "LOW_CONFIDENCE",
    "OK",
]

SEVERITY_ORDER = {"HIGH": 0, "MED": 1, "LOW": 2, "INFO": 3}


def _as_bool(value: Any) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() in {"true", "1", "yes", "y", "t"}


def _as_int(value: Any, default: int = 0) -> int:
    try:
        if value is None or str(value).strip() == "":
            return default
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _status_sort_key(status: str) -> Tuple[int, str]:
    s = (status or "").strip()
    if s in STATUS_ORDER:
        return (STATUS_ORDER.index(s), s)
    return (999, s)


def status_to_severity(status: str | None, manual_review: bool, holiday_count_in_period: int) -> str:
    """
    Bucket a row by entitlement risk.

    An unresolved region means the holiday calendar is unknown (HIGH). Gaps in
    the rules only matter when holidays actually fall in the pay period.
    """
    s = (status or "").strip().upper()

    if s in {"UNKNOWN_REGION", "ERROR", ""}:
        return "HIGH"

    if s in {"RULES_MISSING", "LOW_CONFIDENCE"} or manual_review:
        return "MED" if holiday_count_in_period > 0 else "LOW"

    return "INFO"


@dataclass(frozen=True)
class ReportContext:
    prepared_as_at: date
    findings_csv: Path
    output_dir: Path
    input_files: List[str]


def load_findings(findings_csv: Path) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    with findings_csv.open("r", encoding="utf-8-sig", newline="") as f:
        for r in csv.DictReader(f):
            r["manual_review"] = _as_bool(r.get("manual_review"))
            r["holiday_count_in_period"] = _as_int(r.get("holiday_count_in_period"))
            if _clean(r.get("error")) and not _clean(r.get("status")):
                r["status"] = "ERROR"
            r["severity"] = status_to_severity(
                r.get("status"), r["manual_review"], r["holiday_count_in_period"]
            )
            rows.append(r)
    return rows


def summarise(findings: List[Dict[str, Any]]) -> Dict[str, Any]:
    starts = sorted({_clean(r.get("pay_period_start")) for r in findings if _clean(r.get("pay_period_start"))})
    ends = sorted({_clean(r.get("pay_period_end")) for r in findings if _clean(r.get("pay_period_end"))})

    by_status: Dict[str, int] = {}
    by_sev: Dict[str, int] = {k: 0 for k in SEVERITY_ORDER}
    by_region: Dict[str, int] = {}

    for r in findings:
        status = _clean(r.get("status")) or "UNKNOWN"
        by_status[status] = by_status.get(status, 0) + 1
        by_sev[r["severity"]] = by_sev.get(r["severity"], 0) + 1
        region = _clean(r.get("region_name")) or _clean(r.get("input_region")) or "—"
        by_region[region] = by_region.get(region, 0) + 1

    total = len(findings)
    manual_review_count = sum(1 for r in findings if r.get("manual_review") is True)
    with_holidays = sum(1 for r in findings if r["holiday_count_in_period"] > 0)

    key_messages: List[str] = []
    if total:
        key_messages.append(
            f"**{total}** record(s) were analysed; **{with_holidays}** have at least one public or "
            "regional holiday inside their pay period."
        )
    if by_status.get("UNKNOWN_REGION"):
        key_messages.append(
            f"**{by_status['UNKNOWN_REGION']}** record(s) name a region that could not be matched to a "
            "New Zealand region (status **UNKNOWN_REGION**); their holiday calendar is unknown."
        )
    if by_status.get("RULES_MISSING"):
        key_messages.append(
            f"**{by_status['RULES_MISSING']}** record(s) fall in a year with no published Matariki date "
            "(status **RULES_MISSING**)."
        )
    if manual_review_count:
        key_messages.append(
            f"**{manual_review_count}** record(s) are flagged for manual review."
        )

    return {
        "period_start": starts[0] if starts else "",
        "period_end": ends[-1] if ends else "",
        "total": total,
        "manual_review_count": manual_review_count,
        "by_status": dict(sorted(by_status.items(), key=lambda kv: _status_sort_key(kv[0]))),
        "by_severity": by_sev,
        "by_region": dict(sorted(by_region.items())),
        "key_messages": key_messages,
    }


def _md_table(headers: List[str], rows: List[List[str]]) -> str:
    out = ["| " + " | ".join(headers) + " |", "| " + " | ".join(["---"] * len(headers)) + " |"]
    for r in rows:
        out.append("| " + " | ".join(r) + " |")
    return "\n".join(out)


def _labelled_holidays(r: Dict[str, Any]) -> str:
    dates = [d.strip() for d in _clean(r.get("holiday_dates_in_period")).split(";") if d.strip()]
    names = [n.strip() for n in _clean(r.get("holiday_names_in_period")).split(";") if n.strip()]
    if not dates:
        return "-"
    items = []
    for i, d in enumerate(dates):
        label = fmt_iso_date(d)
        items.append(f"{names[i]} ({label})" if i < len(names) else label)
    return "; ".join(items)


def _finding_block(r: Dict[str, Any]) -> str:
    status = _clean(r.get("status")) or "UNKNOWN"
    sev = r["severity"]
    emp = _clean(r.get("employee_id")) or "—"

    if status == "UNKNOWN_REGION":
        next_action = "Correct the region on the employee record and rerun the check."
    elif status == "ERROR":
        next_action = "Check the row for malformed values and rerun."
    elif status == "RULES_MISSING":
        next_action = "Confirm whether Matariki falls in the pay period from the official gazette."
    elif status == "LOW_CONFIDENCE":
        next_action = "Confirm the holiday dates against an official calendar for this year."
    else:
        next_action = "Cross-check payroll pay events for the listed holiday dates."

    evidence = [
        f"- **Employee:** `{emp}`",
        f"- **Region:** {_clean(r.get('region_name')) or _clean(r.get('input_region')) or '—'}",
        f"- **Pay period:** {fmt_iso_date(r.get('pay_period_start'))} → {fmt_iso_date(r.get('pay_period_end'))}",
        f"- **Holidays in period:** {r['holiday_count_in_period']} ({_labelled_holidays(r)})",
        f"- **Status:** `{status}`  |  **Severity:** **{sev}**  |  **Manual review:** `{bool(r.get('manual_review'))}`",
    ]
    rules = _clean(r.get("rules_applied"))
    if rules:
        evidence.append(f"- **Regional rules applied (full year):** {rules}")
    error = _clean(r.get("error"))
    if error:
        evidence.append(f"- **Error:** {error}")

    msg = _clean(r.get("audit_message")) or error or "(No audit message provided.)"
    return "\n".join([
        f"### {sev} — {status} — Employee {emp}",
        "",
        f"**Finding**: {msg}",
        "",
        "**Evidence**:",
        "",
        *evidence,
        "",
        f"**Recommended next action**: {next_action}",
        "",
    ])


def render_markdown(ctx: ReportContext, findings: List[Dict[str, Any]], summary: Dict[str, Any]) -> str:
    exec_bullets = "\n".join(f"- {m}" for m in summary.get("key_messages", [])) or "- No records were provided."

    sev_rows = [[k, str(v)] for k, v in summary.get("by_severity", {}).items()]
    status_rows = [[k, str(v)] for k, v in summary.get("by_status", {}).items()]
    region_rows = [[k, str(v)] for k, v in summary.get("by_region", {}).items()]

    findings_sorted = sorted(
        findings,
        key=lambda r: (
            SEVERITY_ORDER.get(r["severity"], 9),
            _status_sort_key(_clean(r.get("status")))[0],
            _clean(r.get("employee_id")),
        ),
    )
    detailed = "\n".join(_finding_block(r) for r in findings_sorted) or "_No findings to display._"
    inputs_list = "\n".join(f"- `{name}`" for name in ctx.input_files) or "- (Not provided)"

    md_parts = [
        "# NZ Public Holiday Payroll Review",
        "",
        f"**Report prepared as at:** {fmt_date(ctx.prepared_as_at)}  ",
        f"**Review period (derived from results):** {fmt_iso_date(summary.get('period_start'))} "
        f"to {fmt_iso_date(summary.get('period_end'))}",
        "",
        "## Purpose and disclaimer",
        "",
        DISCLAIMER_BLOCK,
        "",
        "## Data sources",
        "",
        inputs_list,
        "",
        f"- Findings CSV: `{ctx.findings_csv.name}`",
        "",
        "## Executive Summary",
        "",
        exec_bullets,
        "",
        "## Key Findings",
        "",
        "### Findings by severity",
        "",
        _md_table(["Severity", "Count"], sev_rows),
        "",
        "### Findings by status",
        "",
        _md_table(["Status", "Count"], status_rows),
        "",
        "### Records by region",
        "",
        _md_table(["Region", "Records"], region_rows),
        "",
        "## Detailed Findings",
        "",
        detailed,
        "",
        "## Limitations & Assumptions",
        "",
        "- **Anniversary days are approximated:** Wellington, Auckland, Nelson, Otago, Marlborough and "
        "Westland anniversaries are shown on their nominal date, not the observed Monday.",
        "- **Chatham Islands:** no anniversary rule is applied.",
        "- **School holidays** are excluded from holiday counts.",
    ]
    return "\n".join(md_parts).strip() + "\n"


def write_report_markdown(md: str, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / "public_holiday_payroll_report.md"
    out_path.write_text(md, encoding="utf-8")
    return out_path


def generate_public_holiday_report(
    findings_csv: Path,
    output_dir: Path,
    *,
    input_files: Optional[List[str]] = None,
    prepared_as_at: Optional[date] = None,
) -> Path:
    ctx = ReportContext(
        prepared_as_at=prepared_as_at or date.today(),
        findings_csv=findings_csv,
        output_dir=output_dir,
        input_files=input_files or [],
    )
    findings = load_findings(findings_csv)
    summary = summarise(findings)
    md = render_markdown(ctx, findings, summary)
    return write_report_markdown(md, output_dir)
