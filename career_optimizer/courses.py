"""Course platform routing for skill-gap recommendations."""

import urllib.parse

COURSERA = "Coursera Professional Certificate"
UDEMY = "Udemy Best-Seller Course"
DATACAMP = "DataCamp Career Track"
LINKEDIN_LEARNING = "LinkedIn Learning"

# Canonical platform name -> the kind of skill routed to it.
PLATFORMS = {
    COURSERA: "Technical/Business",
    UDEMY: "Niche/Software",
    DATACAMP: "Data/AI",
    LINKEDIN_LEARNING: "General",
}

_BRANDS = {
    "coursera": COURSERA,
    "udemy": UDEMY,
    "datacamp": DATACAMP,
    "linkedin": LINKEDIN_LEARNING,
}

_SEARCH_URLS = {
    COURSERA: "https://www.coursera.org/search?query={q}",
    UDEMY: "https://www.udemy.com/courses/search/?q={q}&sort=relevance",
    DATACAMP: "https://www.datacamp.com/search?q={q}",
    LINKEDIN_LEARNING: "https://www.linkedin.com/learning/search?keywords={q}",
}


def normalize_platform(value: str) -> str:
    """Map a loose platform name ("coursera", "Udemy course") to its canonical form.

    Unknown values come back unchanged so schema validation rejects them.
    """
    if not isinstance(value, str):
        return value
    squashed = value.lower().replace(" ", "")
    for brand, canonical in _BRANDS.items():
        if brand in squashed:
            return canonical
    return value


def normalize_skill_gaps(result: dict) -> dict:
    """Normalize every gap's platform in place and return the result."""
    for gap in result.get("skillGaps") or []:
        if isinstance(gap, dict) and "platform" in gap:
            gap["platform"] = normalize_platform(gap["platform"])
    return result


def platform_badge(platform: str) -> str:
    """Short badge label shown on a gap card, e.g. 'Coursera'."""
    return platform.split(" ")[0] if platform else ""


def enrol_url(gap: dict) -> str | None:
    """Search URL for the suggested course on the gap's platform."""
    template = _SEARCH_URLS.get(gap.get("platform", ""))
    if not template:
        return None
    term = (gap.get("suggestedCourse") or gap.get("skill") or "").strip()
    return template.format(q=urllib.parse.quote_plus(term))


def summarize_gaps(result: dict) -> str:
    count = len(result.get("skillGaps") or [])
    return f"Calculated based on {count} critical missing nodes."


def decorate_gaps(result: dict) -> list[dict]:
    """Gap cards for the UI: each gap plus its badge and enrol link."""
    return [
        {**gap, "badge": platform_badge(gap["platform"]), "enrol_url": enrol_url(gap)}
        for gap in result.get("skillGaps", [])
    ]
