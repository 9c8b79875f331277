"""Write-path normalizer for controversies and citations.

Every company create/update (admin or public submission) runs the
client payload through ``clean_company_payload`` before it reaches the
store. The functions are idempotent: cleaning already-clean data returns
an equal value.

Reading goes the other way: ``parse_controversies`` accepts the legacy
plain-text format and orders entries newest first.
"""

from typing import Any

from butji.companies.schemas import RESERVED_CITATION_KEY, Citation, Controversy


def _non_blank(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def clean_citation_list(citations: Any) -> list[Citation]:
    """Keep only citations whose ``url`` is a non-blank string."""
    if not isinstance(citations, list):
        return []
    return [c for c in citations if isinstance(c, dict) and _non_blank(c.get("url"))]


def clean_controversy(entry: Any) -> Controversy | None:
    """Normalize one controversy; ``None`` when its text is blank."""
    if not isinstance(entry, dict) or not _non_blank(entry.get("text")):
        return None

    cleaned: Controversy = {"text": entry["text"].strip()}

    date = entry.get("date")
    if _non_blank(date):
        cleaned["date"] = date.strip()

    citations = clean_citation_list(entry.get("citations"))
    if citations:
        cleaned["citations"] = citations

    return cleaned


def clean_controversies(value: Any) -> list[Controversy] | None:
    """Drop blank controversies and empty citations.

    A legacy plain string becomes a single-entry list. Returns ``None``
    when nothing survives so the column is stored as NULL.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = [{"text": value}]
    if not isinstance(value, list):
        return None

    cleaned = [c for c in (clean_controversy(entry) for entry in value) if c is not None]
    return cleaned or None


def clean_citations(value: Any) -> dict[str, list[Citation]] | None:
    """Clean the field-keyed citation mapping.

    Drops the reserved ``controversies`` key and any field whose citation
    list is empty after filtering.
    """
    if not isinstance(value, dict):
        return None

    cleaned: dict[str, list[Citation]] = {}
    for field_name, citations in value.items():
        if field_name == RESERVED_CITATION_KEY:
            continue
        kept = clean_citation_list(citations)
        if kept:
            cleaned[field_name] = kept
    return cleaned


def clean_company_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``payload`` with controversies and citations cleaned.

    Keys absent from the payload stay absent, so partial updates keep
    their "not supplied" meaning.
    """
    cleaned = dict(payload)
    if "controversies" in cleaned:
        cleaned["controversies"] = clean_controversies(cleaned["controversies"])
    if "citations" in cleaned:
        cleaned["citations"] = clean_citations(cleaned["citations"])
    return cleaned


def parse_controversies(value: Any) -> list[Controversy] | None:
    """Read a stored controversies value, newest-dated entries first.

    Accepts the current list format and the legacy plain-text format.
    Undated entries keep their relative order after all dated ones.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return [{"text": value}]
    if not isinstance(value, list):
        return None

    entries = [c for c in value if isinstance(c, dict)]
    dated = sorted((c for c in entries if c.get("date")), key=lambda c: c["date"], reverse=True)
    undated = [c for c in entries if not c.get("date")]
    return dated + undated
