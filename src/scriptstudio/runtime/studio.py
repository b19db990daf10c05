"""Script studio service: generate, segment and keep history of scripts."""

from typing import Any, Optional

from pydantic import ValidationError

from ..config.schema import StudioConfig
from ..core.abc import Logger, Meter, ScriptGenerator, ScriptStore, Segmenter
from ..core.types import ScriptRecord, Segmentation, StudioResult
from ..segmenters.cascade import ScriptSegmenter
from .prompting import build_script_prompt
from .schemas import GenerateRequest, SaveRequest, SplitRequest, field_errors, parse

class ScriptStudio:
    """
    Service layer wrapping a generation provider, the segmentation engine and
    a history store.

    Every public method returns a StudioResult shaped like an HTTP response;
    validation, upstream and storage failures are reported, never raised.
    """

    def __init__(self, *, config: StudioConfig, generator: Optional[ScriptGenerator],
                 store: ScriptStore, segmenter: Optional[Segmenter] = None,
                 logger: Optional[Logger] = None, meter: Optional[Meter] = None):
        """
        Initialize the studio with config and dependencies.

        Args:
            config: Validated Script Studio config
            generator: Generation provider, or None when unconfigured
            store: Script history store
            segmenter: Scene segmenter (defaults to the marker cascade)
            logger: Optional structured logger
            meter: Optional metrics collector
        """
        self.config = config
        self.generator = generator
        self.store = store
        self.segmenter = segmenter or ScriptSegmenter(config.segmentation.marker_label)
        self.log = logger
        self.meter = meter

    def segment(self, script: str, count: Optional[int] = None) -> Segmentation:
        """Run the segmentation engine and record which tier won."""
        segmentation = self.segmenter.split(script, count)
        if self.meter:
            self.meter.inc("scriptstudio.segmentation", strategy=segmentation.strategy)
        return segmentation

    def generate(self, payload: Any, owner_id: Optional[str] = None, persist: bool = False) -> StudioResult:
        """
        Generate a script for ``{idea, amount}`` and split it into parts.

        Args:
            payload: Request body mapping
            owner_id: Resolved owner, None for anonymous callers
            persist: Save the script to history (best effort)

        Returns:
            StudioResult: 200 with script/parts, 400/500/502 on failure
        """
        if self.generator is None:
            env = self.config.generation.api_key_env
            if self.log:
                self.log.error("generator_unconfigured", provider=self.config.generation.provider)
            return StudioResult(ok=False, status=500, message=f"{env} is not set on the server.")

        try:
            request = parse(GenerateRequest, payload, self.config.limits)
        except ValidationError as e:
            return StudioResult(ok=False, status=400, errors=field_errors(e))

        try:
            prompt = build_script_prompt(request.idea, request.amount,
                                         label=self.config.segmentation.marker_label)
            result = self.generator.generate(prompt)

            if not result.ok:
                if self.meter:
                    self.meter.inc("scriptstudio.upstream_failure", status=str(result.status_code))
                if self.log:
                    self.log.error("generation_failed", status=result.status_code, detail=result.detail)
                return StudioResult(ok=False, status=502, message="Generation API request failed",
                                    data={"upstreamStatus": result.status_code})

            segmentation = self.segment(result.text, request.amount)
            if self.log:
                self.log.info("script_generated",
                              amount=request.amount,
                              parts=len(segmentation.parts),
                              strategy=segmentation.strategy)

            data = {
                "script": result.text,
                "parts": segmentation.texts,
                "strategy": segmentation.strategy,
            }
            if persist:
                record = self._save_quietly(owner_id, request.idea, request.amount, result.text)
                if record is not None:
                    data["scriptId"] = record.id

            return StudioResult(ok=True, status=200, data=data)

        except Exception as e:
            if self.log:
                self.log.error("generate_error", error=str(e))
            return StudioResult(ok=False, status=500,
                                message="Something went wrong while generating the script.")

    def split(self, payload: Any) -> StudioResult:
        """Segment caller-supplied text: ``{script, amount?}``."""
        try:
            request = parse(SplitRequest, payload)
        except ValidationError as e:
            return StudioResult(ok=False, status=400, errors=field_errors(e))

        segmentation = self.segment(request.script, request.amount)
        return StudioResult(ok=True, status=200,
                            data={"parts": segmentation.texts, "strategy": segmentation.strategy})

    def save(self, payload: Any, owner_id: Optional[str] = None) -> StudioResult:
        """Persist ``{idea, amount, content}`` to the owner's history."""
        try:
            request = parse(SaveRequest, payload, self.config.limits)
        except ValidationError as e:
            return StudioResult(ok=False, status=400, errors=field_errors(e))

        try:
            record = self.store.add(owner_id, request.idea, request.amount, request.content)
        except Exception as e:
            if self.log:
                self.log.error("save_script_error", error=str(e))
            return StudioResult(ok=False, status=500, message="Failed to save script.")

        if self.log:
            self.log.info("script_saved", script_id=record.id, owner=owner_id or "anonymous")
        return StudioResult(ok=True, status=201, data={"script": record.to_dict()})

    def history(self, owner_id: Optional[str] = None) -> StudioResult:
        """List the owner's scripts, newest first."""
        try:
            records = self.store.list(owner_id, limit=self.config.history.limit)
        except Exception as e:
            if self.log:
                self.log.error("fetch_scripts_error", error=str(e))
            return StudioResult(ok=False, status=500, message="Failed to load scripts.")

        return StudioResult(ok=True, status=200, data={"scripts": [r.to_dict() for r in records]})

    def get(self, record_id: str, owner_id: Optional[str] = None) -> StudioResult:
        """Fetch one of the owner's records: 200 ``{script}``, 404 or 500."""
        try:
            record = self.store.get(record_id, owner_id)
        except Exception as e:
            if self.log:
                self.log.error("fetch_script_error", script_id=record_id, error=str(e))
            return StudioResult(ok=False, status=500, message="Failed to load script.")

        if record is None:
            return StudioResult(ok=False, status=404, message="Script not found.")
        return StudioResult(ok=True, status=200, data={"script": record.to_dict()})

    def _save_quietly(self, owner_id, idea, amount, content) -> Optional[ScriptRecord]:
        try:
            return self.store.add(owner_id, idea, amount, content)
        except Exception as e:
            if self.log:
                self.log.warn("history_save_skipped", error=str(e))
            return None
