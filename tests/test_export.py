"""Test part file export and archives."""

import io
import zipfile

from scriptstudio.runtime.export import FULL_SCRIPT_NAME, build_archive, part_filename, write_parts


class TestExport:

    def test_part_filename(self):
        assert part_filename(1) == "script-part-1.txt"
        assert part_filename(12) == "script-part-12.txt"

    def test_write_parts(self, tmp_path):
        outdir = tmp_path / "nested" / "out"
        written = write_parts(["First part", "Second – part"], outdir, full_script="raw script")

        assert [p.name for p in written] == ["script-part-1.txt", "script-part-2.txt", FULL_SCRIPT_NAME]
        assert (outdir / "script-part-2.txt").read_text(encoding="utf-8") == "Second – part"
        assert (outdir / FULL_SCRIPT_NAME).read_text(encoding="utf-8") == "raw script"

    def test_write_parts_without_full_script(self, tmp_path):
        written = write_parts(["only"], tmp_path)

        assert [p.name for p in written] == ["script-part-1.txt"]

    def test_build_archive(self):
        data = build_archive(["a", "b"], full_script="a b")

        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert zf.namelist() == ["script-part-1.txt", "script-part-2.txt", FULL_SCRIPT_NAME]
            assert zf.read("script-part-2.txt").decode("utf-8") == "b"

    def test_empty_archive(self):
        with zipfile.ZipFile(io.BytesIO(build_archive([]))) as zf:
            assert zf.namelist() == []
