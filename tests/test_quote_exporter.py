import csv
import io

from innovaport.modules.quotes.exporter import CSV_BOM, EXPORT_FIELDS, export_csv, export_html

QUOTE = {
    "id": "q-1",
    "name": "Claire Martin",
    "email": "claire@example.com",
    "project_type": "Mobile app",
    "platforms": {"ios": True, "android": False},
    "budget": "10k-20k",
    "features": ["Login", "Payments"],
    "description": 'Needs "quotes", commas, and\nnew lines',
    "status": "discussing",
    "created_at": "2026-10-01T09:30:00+00:00",
}


class TestCsvExport:
    def test_starts_with_bom_and_uses_crlf(self):
        content = export_csv(QUOTE)
        assert content.startswith(CSV_BOM)
        assert "\r\n" in content

    def test_header_and_single_row(self):
        rows = list(csv.reader(io.StringIO(export_csv(QUOTE)[len(CSV_BOM):])))
        assert rows[0] == [label for label, _ in EXPORT_FIELDS]
        assert len(rows) == 2
        row = dict(zip(rows[0], rows[1]))
        assert row["Features"] == "Login, Payments"
        assert row["Platforms"] == "ios"
        assert row["Description"] == 'Needs "quotes", commas, and\nnew lines'
        assert row["Phone"] == ""

    def test_every_field_is_quoted(self):
        header_line = export_csv(QUOTE)[len(CSV_BOM):].split("\r\n")[0]
        assert header_line.startswith('"Name","Email"')


class TestHtmlExport:
    def test_contains_escaped_quote_details(self):
        quote = {**QUOTE, "name": "<script>alert(1)</script>"}
        document = export_html(quote, {"full_name": "Alice Dev"})
        assert "&lt;script&gt;" in document
        assert "<script>alert(1)</script>" not in document
        assert "Alice Dev" in document
        assert "Mobile app" in document
