"""Test marker detection."""

from scriptstudio.segmenters.markers import Marker, detect_markers, marker_pattern


class TestMarkerDetection:
    """Test detection of enumerated scene labels."""

    def test_detects_in_source_order(self):
        text = "Scene 1: a\nScene 2: b\nScene 10: c"
        markers = detect_markers(text)

        assert [m.label for m in markers] == ["Scene 1:", "Scene 2:", "Scene 10:"]
        assert markers[0] == Marker(start=0, end=8, label="Scene 1:")
        assert all(a.end <= b.start for a, b in zip(markers, markers[1:]))

    def test_empty_text(self):
        assert detect_markers("") == []

    def test_case_and_spacing(self):
        markers = detect_markers("sCeNe   7: x  SCENE\t8: y")

        assert [m.label for m in markers] == ["sCeNe   7:", "SCENE\t8:"]

    def test_requires_digits_and_colon(self):
        assert detect_markers("Scene one: nope. Scene 2 missing colon. Scene: 3") == []

    def test_numbers_need_not_be_sequential(self):
        assert len(detect_markers("Scene 5: a Scene 2: b")) == 2

    def test_custom_label_is_escaped(self):
        pattern = marker_pattern("Shot.")
        assert pattern.search("Shot. 1: ok")
        assert not pattern.search("Shotx 1: no")

    def test_non_ascii_digits_are_not_markers(self):
        assert detect_markers("Scene ٣: a. Scene ٤: b.") == []
        assert detect_markers("Scene ３: a") == []
