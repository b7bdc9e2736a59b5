from typing import Dict, Any, Optional
from graph.state import LeadState
from leads.models import WebsiteQuality
from loguru import logger

# Accepted spellings per normalized key
FIELD_ALIASES = {
    "has_website": ("has_website", "hasWebsite"),
    "website_quality": ("website_quality", "websiteQuality"),
    "annual_revenue": ("annual_revenue", "annualRevenue", "revenue"),
    "category": ("category", "industry"),
    "city": ("city",),
    "state": ("state",),
    "employee_count": ("employee_count", "employeeCount", "employees"),
    "email": ("email",),
    "phone": ("phone",),
    "emails_sent": ("emails_sent", "emailsSent"),
    "converted_at": ("converted_at", "convertedAt"),
}

NUMERIC_FIELDS = ("annual_revenue", "employee_count", "emails_sent")
TEXT_FIELDS = ("category", "city", "state", "email", "phone")


def _first(raw: Dict[str, Any], keys) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _to_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and strings like "$1,200,000" to a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    cleaned = str(value).replace(",", "").replace("$", "").strip()
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "y")
    return bool(value)


def _to_text(value: Any) -> Optional[str]:
    """Strip strings, stringify plain scalars; anything else is unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def capture(state: LeadState) -> LeadState:
    """Normalize and validate incoming lead payload."""
    raw = state.get("raw") or {}
    logger.info(f"Starting capture for lead: {raw.get('id') or raw.get('email') or 'unknown'}")

    normalized: Dict[str, Any] = {key: _first(raw, aliases) for key, aliases in FIELD_ALIASES.items()}

    for key in NUMERIC_FIELDS:
        value = normalized.get(key)
        number = _to_number(value)
        if value is not None and number is None:
            state.setdefault("errors", []).append(f"Ignored non-numeric {key}: {value!r}")
        normalized[key] = number

    normalized["emails_sent"] = normalized["emails_sent"] or 0

    # Older payloads carry only the site URL
    website_url = raw.get("website") or raw.get("website_url") or raw.get("websiteUrl")
    if normalized["has_website"] is None:
        normalized["has_website"] = bool(website_url)
    else:
        normalized["has_website"] = _to_bool(normalized["has_website"])

    quality = normalized.get("website_quality")
    normalized["website_quality"] = WebsiteQuality.parse(quality)
    if quality and normalized["website_quality"] is None:
        state.setdefault("errors", []).append(f"Unknown website quality: {quality!r}")

    for key in TEXT_FIELDS:
        value = normalized.get(key)
        text = _to_text(value)
        if value is not None and text is None and not isinstance(value, str):
            state.setdefault("errors", []).append(f"Ignored non-text {key}: {value!r}")
        normalized[key] = text
    if normalized.get("state"):
        normalized["state"] = normalized["state"].upper()

    state["normalized"] = normalized
    state["lead_id"] = str(raw.get("id") or normalized.get("email") or raw.get("name") or "anonymous")

    logger.info(f"Capture completed for {state['lead_id']}")
    return state
