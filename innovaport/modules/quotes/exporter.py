"""
Quote export formats: a print-ready HTML document and a spreadsheet-friendly CSV.
"""

import csv
import io
from html import escape
from typing import Any, Dict, List, Tuple

from innovaport.modules.notifications.templates import STATUS_LABELS

CSV_BOM = "\ufeff"

EXPORT_FIELDS: List[Tuple[str, str]] = [
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Company", "company"),
    ("Location", "location"),
    ("Project type", "project_type"),
    ("Platforms", "platforms"),
    ("Budget", "budget"),
    ("Deadline", "deadline"),
    ("Features", "features"),
    ("Design preference", "design_pref"),
    ("Description", "description"),
    ("Contact preference", "contact_pref"),
    ("Status", "status"),
    ("Received", "created_at"),
]


def _cell(quote: Dict[str, Any], key: str) -> str:
    value = quote.get(key)
    if value is None:
        return ""
    if key == "features" and isinstance(value, list):
        return ", ".join(value)
    if key == "platforms" and isinstance(value, dict):
        return ", ".join(name for name, enabled in value.items() if enabled)
    if key == "status":
        return STATUS_LABELS.get(value, value)
    return str(value)


def export_csv(quote: Dict[str, Any]) -> str:
    """Header row plus one data row, prefixed with a UTF-8 BOM so Excel picks the encoding"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow([label for label, _ in EXPORT_FIELDS])
    writer.writerow([_cell(quote, key) for _, key in EXPORT_FIELDS])
    return CSV_BOM + buffer.getvalue()


def export_html(quote: Dict[str, Any], developer: Dict[str, Any]) -> str:
    developer_name = developer.get("full_name") or developer.get("username") or ""
    rows = "".join(
        f"<tr><th>{escape(label)}</th><td>{escape(_cell(quote, key)).replace(chr(10), '<br>')}</td></tr>"
        for label, key in EXPORT_FIELDS
    )
    title = f"Quote request - {quote.get('name', '')}"
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{escape(title)}</title>
<style>
body {{ font-family: Arial, sans-serif; color: #111827; margin: 40px; }}
h1 {{ font-size: 22px; margin-bottom: 4px; }}
.meta {{ color: #6B7280; margin-bottom: 24px; }}
table {{ width: 100%; border-collapse: collapse; }}
th {{ text-align: left; width: 200px; vertical-align: top; padding: 8px; background: #F9FAFB; }}
td {{ padding: 8px; border-bottom: 1px solid #E5E7EB; }}
@media print {{ body {{ margin: 0; }} }}
</style>
</head>
<body>
<h1>{escape(title)}</h1>
<p class="meta">Prepared by {escape(developer_name)}</p>
<table>{rows}</table>
</body>
</html>"""
