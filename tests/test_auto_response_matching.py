import pytest

from innovaport.modules.auto_responses.matching import (
    budget_overlaps,
    build_context,
    parse_budget,
    render_template,
    render_text,
    select_template,
)


def template(name, created_at, project_type=None, budget_range=None, enabled=True):
    conditions = {}
    if project_type:
        conditions["project_type"] = project_type
    if budget_range is not None:
        conditions["budget_range"] = budget_range
    return {
        "id": name,
        "name": name,
        "enabled": enabled,
        "conditions": conditions,
        "subject": f"{name} subject",
        "body_html": "Hello",
        "created_at": created_at,
    }


class TestParseBudget:
    @pytest.mark.parametrize("budget,expected", [
        ("small", (0, 5000)),
        ("XL", (20000, None)),
        ("10k-20k", (10000, 20000)),
        ("5 000 - 10 000 EUR", (5000, 10000)),
        ("15000", (15000, 15000)),
        ("under 3k", (0, 3000)),
        ("20k+", (20000, None)),
    ])
    def test_known_formats(self, budget, expected):
        assert parse_budget(budget) == expected

    def test_unparseable(self):
        assert parse_budget("to be discussed") is None
        assert parse_budget("") is None
        assert parse_budget(None) is None


class TestBudgetOverlap:
    def test_bounds_are_inclusive(self):
        assert budget_overlaps("5000", {"min": 5000, "max": 10000}) is True
        assert budget_overlaps("10000", {"min": 5000, "max": 10000}) is True

    def test_disjoint_ranges(self):
        assert budget_overlaps("small", {"min": 10000, "max": 20000}) is False
        assert budget_overlaps("xl", {"min": 0, "max": 10000}) is False

    def test_open_template_range(self):
        assert budget_overlaps("large", {"min": 15000}) is True
        assert budget_overlaps("large", {"max": 12000}) is True

    def test_unparseable_budget_does_not_match(self):
        assert budget_overlaps("flexible", {"min": 0, "max": 100}) is False


class TestSelectTemplate:
    quote = {"project_type": "Mobile app", "budget": "10k-20k"}

    def test_most_specific_template_wins(self):
        generic = template("generic", "2026-01-01T00:00:00+00:00")
        by_type = template("by-type", "2026-02-01T00:00:00+00:00", project_type="mobile app")
        by_both = template(
            "by-both", "2026-03-01T00:00:00+00:00",
            project_type="Mobile app", budget_range={"min": 15000, "max": 30000},
        )
        assert select_template([generic, by_type, by_both], self.quote)["id"] == "by-both"

    def test_oldest_template_breaks_ties(self):
        newer = template("newer", "2026-05-01T00:00:00+00:00", project_type="Mobile app")
        older = template("older", "2026-04-01T00:00:00+00:00", project_type="Mobile app")
        assert select_template([newer, older], self.quote)["id"] == "older"

    def test_disabled_and_mismatched_templates_are_ignored(self):
        disabled = template("disabled", "2026-01-01T00:00:00+00:00", enabled=False)
        web_only = template("web", "2026-01-01T00:00:00+00:00", project_type="Website")
        assert select_template([disabled, web_only], self.quote) is None


class TestRendering:
    def test_missing_values_render_as_not_specified(self):
        context = build_context({"name": "Claire", "project_type": "Mobile app"}, "Alice", None)
        assert render_text("{{clientName}} / {{deadline}}", context) == "Claire / Not specified"

    def test_body_is_escaped_and_keeps_line_breaks(self):
        context = build_context({"name": "<b>Eve</b>", "budget": "small"}, "Alice", "alice@example.com")
        subject, body = render_template(
            {"subject": "Hi {{clientName}}", "body_html": "Dear {{clientName}},\nBudget: {{budget}}"},
            context,
        )
        assert subject == "Hi <b>Eve</b>"
        assert body == "Dear &lt;b&gt;Eve&lt;/b&gt;,<br>Budget: small"
