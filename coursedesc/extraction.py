"""
Marker based slicing of a teaching description.

The English teaching page has no dedicated element for the part we want, so the
description text is cut between the "Learning outcomes" heading and an end marker
chosen from the teaching title.
"""
from coursedesc.config import MarkerTable, WILDCARD
from coursedesc.errors import ConfigurationError

START_MARKER = "Learning outcomes"
# Characters dropped right before the end marker (the line break preceding the next heading)
END_BACKOFF = 2


def select_end_marker(markers: MarkerTable, title: str) -> str:
    """
    Returns the marker of the first non-wildcard entry whose pattern occurs in the
    title, or the wildcard marker if none does.
    """
    fallback = markers.wildcard
    if fallback is None:
        raise ConfigurationError(f"No description end marker defined for pattern '{WILDCARD}'")

    for pattern, marker in markers.entries:
        if pattern != WILDCARD and pattern in title:
            return marker
    return fallback


def slice_description(text: str, end_marker: str, start_marker: str = START_MARKER) -> str:
    """
    Cuts the description from the start marker (included) up to END_BACKOFF characters
    before the end marker. A missing start marker yields an empty string, a missing
    end marker extends the slice to the end of the text.
    """
    start = text.find(start_marker)
    if start == -1:
        start = len(text)
    end = text.find(end_marker)
    if end == -1:
        end = len(text)
    return text[start:max(end - END_BACKOFF, 0)]


def normalize_paragraphs(raw: str) -> list[str]:
    return [line.strip() for line in raw.split("\n") if line.strip()]
