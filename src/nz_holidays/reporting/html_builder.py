from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import Tuple

import markdown

logger = logging.getLogger(__name__)

# Palette matches the holiday colours used in the planner UI
BASE_CSS = """
body {
    font-family: system-ui, -apple-system, "Segoe UI", sans-serif;
    font-size: 14px;
    line-height: 1.5;
    color: #1e293b;
    margin: 0;
    padding: 2rem;
    background: #f8fafc;
}

.report-container {
    max-width: 900px;
    margin: 0 auto;
    background: #fff;
    padding: 2rem 2.5rem;
    border-radius: 8px;
    border-top: 6px solid #4f46e5;
    box-shadow: 0 2px 8px rgba(15, 23, 42, 0.06);
}

h1 { font-size: 1.8rem; margin-bottom: 0.75rem; color: #0f172a; }
h2 { font-size: 1.4rem; margin-top: 2rem; border-bottom: 1px solid #e2e8f0; padding-bottom: 0.25rem; }
h3 { font-size: 1.1rem; margin-top: 1.25rem; color: #4338ca; }

code {
    font-family: ui-monospace, Menlo, Consolas, monospace;
    font-size: 0.9em;
    background: #eef2ff;
    padding: 0.1em 0.3em;
    border-radius: 4px;
}

table { border-collapse: collapse; width: 100%; margin: 0.75rem 0; font-size: 0.9rem; }
th, td { border: 1px solid #e2e8f0; padding: 0.4rem 0.5rem; text-align: left; }
th { background: #f1f5f9; font-weight: 600; }
"""


def render_html(md_text: str, title: str) -> str:
    body_html = markdown.markdown(md_text, extensions=["tables", "fenced_code"])
    return f"""<!DOCTYPE html>
<html lang="en-NZ">
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
  {BASE_CSS}
  </style>
</head>
<body>
  <div class="report-container">
    {body_html}
  </div>
</body>
</html>
"""


def build_html_and_pdf(
    md_path: Path,
    out_dir: Path,
    title: str = "NZ Public Holiday Payroll Review",
) -> Tuple[Path, Path | None]:
    """
    Convert a Markdown report to styled HTML, and best-effort PDF using WeasyPrint.

    Returns (html_path, pdf_path_or_None).
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    html_doc = render_html(md_path.read_text(encoding="utf-8"), title)
    html_path = out_dir / f"{md_path.stem}.html"
    html_path.write_text(html_doc, encoding="utf-8")

    try:
        from weasyprint import HTML  # type: ignore
    except (ImportError, OSError):
        # OSError: installed, but pango/cairo system libraries are missing
        logger.info("WeasyPrint not available; skipping PDF")
        return html_path, None

    pdf_path = out_dir / f"{md_path.stem}.pdf"
    try:
        HTML(string=html_doc, base_url=str(out_dir)).write_pdf(str(pdf_path))
    except Exception:
        logger.warning("PDF generation failed for %s", html_path, exc_info=True)
        return html_path, None

    return html_path, pdf_path
