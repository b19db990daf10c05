"""Mock generator for testing and offline use."""

import hashlib
import re
from typing import Optional

from ..core.types import GenerationResult

_COUNT_RE = re.compile(r"EXACTLY\s+(\d+)\s+scenes", re.IGNORECASE)
_LABEL_RE = re.compile(r'Label every scene as "([^"\d]+?)\s*1:"')
_IDEA_RE = re.compile(r"User idea:\s*(.+)\s*$", re.DOTALL)

_OPENERS = [
    "Picture this",
    "Here is the twist",
    "Stay with me",
    "Now look closer",
    "This is where it gets interesting",
    "Think about it",
]

_VISUALS = [
    "Slow push-in on the subject",
    "Wide aerial shot of the city at dawn",
    "Close-up of hands sketching on paper",
    "Split screen comparing before and after",
    "Timelapse of clouds over the skyline",
    "Over-the-shoulder view of a glowing screen",
]

class MockGenerator:
    """A simple deterministic mock writer for testing and offline use."""

    def __init__(self, default_count: int = 3, fail_with: Optional[int] = None):
        """Initialize mock generator.

        Args:
            default_count: Scenes to write when the prompt does not state a count
            fail_with: If set, every call fails with this upstream status code
        """
        self.default_count = default_count
        self.fail_with = fail_with
        self.prompts = []

    def generate(self, prompt: str) -> GenerationResult:
        """Write ``<Label> N:`` blocks derived from the idea in the prompt.

        Same prompt in, same script out.
        """
        self.prompts.append(prompt)
        if self.fail_with is not None:
            return GenerationResult(ok=False, status_code=self.fail_with,
                                    detail="mock generator configured to fail")

        count_match = _COUNT_RE.search(prompt)
        count = int(count_match.group(1)) if count_match else self.default_count
        label_match = _LABEL_RE.search(prompt)
        label = label_match.group(1).strip() if label_match else "Scene"
        idea_match = _IDEA_RE.search(prompt)
        idea = idea_match.group(1).strip() if idea_match else prompt.strip()[:80]

        scenes = [self._scene(idea, label, i) for i in range(1, count + 1)]
        return GenerationResult(ok=True, text="\n\n".join(scenes), status_code=200)

    def _scene(self, idea: str, label: str, number: int) -> str:
        digest = hashlib.sha256(f"{idea}:{number}".encode("utf-8")).digest()
        opener = _OPENERS[digest[0] % len(_OPENERS)]
        visual = _VISUALS[digest[1] % len(_VISUALS)]
        return (
            f"{label} {number}:\n"
            f"{opener}: {idea}, part {number}. "
            f"Every step builds on the last one. "
            f"[{visual}]"
        )

def create_mock_generator(default_count: int = 3, fail_with: Optional[int] = None) -> MockGenerator:
    """Create a mock generator instance."""
    return MockGenerator(default_count=default_count, fail_with=fail_with)
