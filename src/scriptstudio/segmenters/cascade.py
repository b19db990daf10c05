"""Deterministic scene segmenter: markers, then paragraphs, then sentences."""

import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..core.types import ScenePart, Segmentation
from .markers import DEFAULT_LABEL, Marker, detect_markers

# A single marker is too easy to hit in ordinary prose.
MIN_MARKERS = 2

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

Span = Tuple[int, int]

class SplitStrategy(str, Enum):
    """Cascade tiers in priority order."""
    MARKERS = "markers"
    PARAGRAPHS = "paragraphs"
    SENTENCES = "sentences"

def _trim(text: str, start: int, end: int) -> Optional[Span]:
    """Shrink a span to its non-whitespace content, or None if nothing is left."""
    piece = text[start:end]
    stripped = piece.strip()
    if not stripped:
        return None
    offset = start + len(piece) - len(piece.lstrip())
    return offset, offset + len(stripped)

def _keep_nonempty(text: str, spans: Iterable[Span]) -> List[Span]:
    result = []
    for start, end in spans:
        trimmed = _trim(text, start, end)
        if trimmed:
            result.append(trimmed)
    return result

def _between_breaks(text: str, pattern: "re.Pattern[str]") -> List[Span]:
    """Spans of text lying between consecutive matches of a separator pattern."""
    spans = []
    cursor = 0
    for match in pattern.finditer(text):
        spans.append((cursor, match.start()))
        cursor = match.end()
    spans.append((cursor, len(text)))
    return spans

def split_on_markers(text: str, markers: List[Marker]) -> List[Span]:
    """Each part runs from the end of its marker to the start of the next one."""
    stops = [m.start for m in markers[1:]] + [len(text)]
    return _keep_nonempty(text, ((m.end, stop) for m, stop in zip(markers, stops)))

def split_paragraphs(text: str) -> List[Span]:
    """Blocks separated by at least one fully blank line."""
    return _keep_nonempty(text, _between_breaks(text, PARAGRAPH_BREAK))

def split_sentences(text: str) -> List[Span]:
    """Sentences ending in . ! or ? followed by whitespace; punctuation stays attached."""
    return _keep_nonempty(text, _between_breaks(text, SENTENCE_BREAK))

def truncate(spans: List[Span], count: Optional[int]) -> List[Span]:
    """Keep the first ``count`` spans. None or a non-positive count means no limit."""
    if count is None or count <= 0:
        return spans
    return spans[:count]

class ScriptSegmenter:
    """
    Splits generated scripts into ordered, trimmed, non-empty parts.

    The cascade is fixed: explicit ``<label> N:`` markers win when at least two
    are present, even if fewer than two parts survive trimming. Otherwise
    blank-line paragraphs are used when there are at least two, and sentences
    are the terminal fallback. Truncation to the requested count is applied
    once, after whichever tier produced the spans. The segmenter never raises
    on string input and holds no state between calls.
    """

    def __init__(self, marker_label: str = DEFAULT_LABEL):
        """
        Initialize segmenter.

        Args:
            marker_label: Word that opens a marker, matched case-insensitively
        """
        self.marker_label = marker_label

    def split(self, text: str, count: Optional[int] = None) -> Segmentation:
        """
        Run the cascade over a raw script.

        Args:
            text: Raw generated script
            count: Requested number of parts; None or <= 0 disables truncation

        Returns:
            Segmentation: Winning strategy and the resulting parts
        """
        text = text or ""
        markers = detect_markers(text, self.marker_label)

        if len(markers) >= MIN_MARKERS:
            strategy, spans = SplitStrategy.MARKERS, split_on_markers(text, markers)
        else:
            strategy, spans = SplitStrategy.PARAGRAPHS, split_paragraphs(text)
            if len(spans) < 2:
                strategy, spans = SplitStrategy.SENTENCES, split_sentences(text)

        parts = [
            ScenePart(index=i, text=text[start:end], start=start, end=end)
            for i, (start, end) in enumerate(truncate(spans, count), start=1)
        ]
        return Segmentation(strategy=strategy.value, parts=parts)

def segment_script(text: str, count: Optional[int] = None,
                   marker_label: str = DEFAULT_LABEL) -> List[str]:
    """Convenience wrapper returning only the part strings."""
    return ScriptSegmenter(marker_label).split(text, count).texts
