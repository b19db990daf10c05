"""Enumerated-label marker detection ("Scene 1:", "Scene 2:", ...)."""

import re
from dataclasses import dataclass
from typing import List

DEFAULT_LABEL = "Scene"

@dataclass(frozen=True)
class Marker:
    """A detected label occurrence inside a raw script."""
    start: int      # offset of the label's first character
    end: int        # offset just past the colon
    label: str      # matched text as written, e.g. "SCENE 3:"

def marker_pattern(label: str = DEFAULT_LABEL) -> "re.Pattern[str]":
    """Case-insensitive ``<label> <ASCII digits>:`` starting at a word boundary."""
    return re.compile(rf"\b{re.escape(label)}\s+[0-9]+:", re.IGNORECASE)

def detect_markers(text: str, label: str = DEFAULT_LABEL) -> List[Marker]:
    """
    Find all non-overlapping marker occurrences in source order.

    Args:
        text: Raw script text
        label: Literal word that opens a marker

    Returns:
        List[Marker]: Markers ordered by first occurrence (empty if none)
    """
    if not text:
        return []
    return [Marker(m.start(), m.end(), m.group(0)) for m in marker_pattern(label).finditer(text)]
