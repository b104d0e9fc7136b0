"""
Auto-response template selection and rendering.

A template matches a quote when it is enabled and all of its declared
conditions hold. The most specific match wins; ties go to the oldest template.
"""

import re
from html import escape
from typing import Any, Dict, Iterable, Optional, Tuple

NOT_SPECIFIED = "Not specified"

BudgetRange = Tuple[float, Optional[float]]

# Budget codes offered by the portfolio contact form
BUDGET_RANGES: Dict[str, BudgetRange] = {
    "small": (0, 5000),
    "medium": (5000, 10000),
    "large": (10000, 20000),
    "xl": (20000, None),
}

_NUMBER_RE = re.compile(r"(\d+(?:[\s.,]\d{3})*(?:[.,]\d+)?)\s*([kK])?")
_LOWER_BOUND_HINTS = (">", "+", "over", "more", "above", "plus")
_UPPER_BOUND_HINTS = ("<", "under", "less", "below", "moins")

PLACEHOLDERS = (
    "clientName",
    "projectType",
    "budget",
    "description",
    "deadline",
    "developerName",
    "developerEmail",
)


def _to_number(raw: str, thousands_suffix: Optional[str]) -> float:
    value = re.sub(r"\s", "", raw)
    value = re.sub(r"[.,](?=\d{3}(?!\d))", "", value)
    number = float(value.replace(",", "."))
    return number * 1000 if thousands_suffix else number


def parse_budget(budget: Optional[str]) -> Optional[BudgetRange]:
    """Resolve a quote budget to a numeric (min, max) range; None when unparseable"""
    if not budget:
        return None
    text = budget.strip().lower()
    if text in BUDGET_RANGES:
        return BUDGET_RANGES[text]

    numbers = [_to_number(raw, suffix) for raw, suffix in _NUMBER_RE.findall(text)]
    if not numbers:
        return None
    if len(numbers) >= 2:
        low, high = sorted(numbers[:2])
        return (low, high)
    if any(hint in text for hint in _UPPER_BOUND_HINTS):
        return (0, numbers[0])
    if any(hint in text for hint in _LOWER_BOUND_HINTS):
        return (numbers[0], None)
    return (numbers[0], numbers[0])


def _bound(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def budget_overlaps(budget: Optional[str], budget_range: Dict[str, Any]) -> bool:
    """Inclusive overlap between the quote budget and a template range"""
    quote_range = parse_budget(budget)
    if quote_range is None:
        return False
    quote_min, quote_max = quote_range
    range_min = _bound(budget_range.get("min"))
    range_max = _bound(budget_range.get("max"))
    if range_max is not None and quote_min > range_max:
        return False
    if range_min is not None and quote_max is not None and quote_max < range_min:
        return False
    return True


def _conditions(template: Dict[str, Any]) -> Dict[str, Any]:
    conditions = template.get("conditions")
    return conditions if isinstance(conditions, dict) else {}


def condition_count(template: Dict[str, Any]) -> int:
    conditions = _conditions(template)
    count = 0
    if conditions.get("project_type"):
        count += 1
    if isinstance(conditions.get("budget_range"), dict):
        count += 1
    return count


def template_matches(template: Dict[str, Any], quote: Dict[str, Any]) -> bool:
    if not template.get("enabled"):
        return False
    conditions = _conditions(template)

    project_type = conditions.get("project_type")
    if project_type:
        quote_type = quote.get("project_type") or ""
        if str(project_type).strip().lower() != str(quote_type).strip().lower():
            return False

    budget_range = conditions.get("budget_range")
    if isinstance(budget_range, dict) and not budget_overlaps(quote.get("budget"), budget_range):
        return False

    return True


def select_template(templates: Iterable[Dict[str, Any]], quote: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    matching = [t for t in templates if template_matches(t, quote)]
    if not matching:
        return None
    matching.sort(key=lambda t: (-condition_count(t), str(t.get("created_at") or "")))
    return matching[0]


def build_context(
    quote: Dict[str, Any],
    developer_name: str,
    developer_email: Optional[str],
) -> Dict[str, Optional[str]]:
    return {
        "clientName": quote.get("name"),
        "projectType": quote.get("project_type"),
        "budget": quote.get("budget"),
        "description": quote.get("description"),
        "deadline": quote.get("deadline"),
        "developerName": developer_name,
        "developerEmail": developer_email,
    }


def render_text(text: str, context: Dict[str, Optional[str]], html: bool = False) -> str:
    """Substitute {{placeholder}} tokens; values are escaped when rendering HTML"""
    for key in PLACEHOLDERS:
        value = context.get(key)
        value = str(value) if value not in (None, "") else NOT_SPECIFIED
        if html:
            value = escape(value)
        text = text.replace("{{" + key + "}}", value)
    return text


def render_template(template: Dict[str, Any], context: Dict[str, Optional[str]]) -> Tuple[str, str]:
    """Return (subject, body_html) for a matched template"""
    subject = render_text(template.get("subject") or "", context)
    body = render_text(template.get("body_html") or "", context, html=True)
    return subject, body.replace("\r\n", "\n").replace("\n", "<br>")
