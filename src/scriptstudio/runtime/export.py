"""Per-part text files and zip archives for segmented scripts."""

import io
import zipfile
from pathlib import Path
from typing import List, Optional, Sequence, Union

FULL_SCRIPT_NAME = "full-script.txt"

def part_filename(number: int) -> str:
    """File name for the 1-based part ``number``."""
    return f"script-part-{number}.txt"

def write_parts(parts: Sequence[str], outdir: Union[str, Path],
                full_script: Optional[str] = None) -> List[Path]:
    """
    Write each part (and optionally the full script) as UTF-8 text files.

    Args:
        parts: Part texts in order
        outdir: Target directory, created if missing
        full_script: Raw script to save alongside the parts

    Returns:
        List[Path]: Written files, parts first
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    written = []
    for i, part in enumerate(parts, start=1):
        path = outdir / part_filename(i)
        path.write_text(part, encoding="utf-8")
        written.append(path)

    if full_script is not None:
        path = outdir / FULL_SCRIPT_NAME
        path.write_text(full_script, encoding="utf-8")
        written.append(path)

    return written

def build_archive(parts: Sequence[str], full_script: Optional[str] = None) -> bytes:
    """Zip all parts (and the full script, if given) in memory."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for i, part in enumerate(parts, start=1):
            zf.writestr(part_filename(i), part)
        if full_script is not None:
            zf.writestr(FULL_SCRIPT_NAME, full_script)
    return buffer.getvalue()
