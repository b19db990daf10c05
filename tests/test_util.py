"""Test small utilities and the console logger."""

import json
from datetime import datetime, timezone

from scriptstudio.core.console import ConsoleLogger
from scriptstudio.core.types import ScriptRecord, StudioResult
from scriptstudio.core.util import round_half_up, safe_json
from scriptstudio.segmenters.cascade import SplitStrategy


class TestSafeJson:

    def test_uses_wire_shapes(self):
        record = ScriptRecord(id="r1", idea="idea", amount=2, content="text",
                              created_at=datetime(2024, 5, 1, tzinfo=timezone.utc), owner_id="u1")
        result = StudioResult(ok=True, status=201, data={"script": record})

        body = json.loads(safe_json(result))

        assert body == {"ok": True, "script": {"id": "r1", "idea": "idea", "amount": 2, "content": "text",
                                               "createdAt": "2024-05-01T00:00:00+00:00"}}

    def test_enums_and_unicode(self):
        assert json.loads(safe_json({"s": SplitStrategy.MARKERS})) == {"s": "markers"}
        assert "é" in safe_json("café")


class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert [round_half_up(v) for v in (0.5, 1.5, 2.5, 2.49)] == [1, 2, 3, 2]


class TestConsoleLogger:

    def test_format(self, capsys):
        ConsoleLogger().info("script_saved", script_id="abc")

        assert capsys.readouterr().out == "INFO: script_saved script_id=abc\n"

    def test_quiet_keeps_errors(self, capsys):
        logger = ConsoleLogger(quiet=True)
        logger.info("hidden")
        logger.warn("hidden")
        logger.error("shown")

        assert capsys.readouterr().out == "ERROR: shown\n"
