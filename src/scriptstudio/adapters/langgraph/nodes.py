"""LangGraph node factories for Script Studio integration."""

from langchain_core.runnables import RunnableLambda
from ...core.abc import Segmenter
from ...runtime.studio import ScriptStudio
from .state_keys import IDEA, SCENE_COUNT, SCRIPT_TEXT, SCRIPTSTUDIO_SCRIPT, SCRIPTSTUDIO_PARTS

def make_generate_node(studio: ScriptStudio, idea_key: str = IDEA, count_key: str = SCENE_COUNT):
    """
    Create a LangGraph node that writes a script for the idea in state.

    Args:
        studio: Configured ScriptStudio instance
        idea_key: State key containing the idea
        count_key: State key containing the requested scene count

    Returns:
        RunnableLambda: Node that adds the studio result to state
    """
    def _generate(state):
        result = studio.generate({"idea": state.get(idea_key, ""), "amount": state.get(count_key)})
        return {SCRIPTSTUDIO_SCRIPT: result.to_dict(),
                SCRIPTSTUDIO_PARTS: result.data.get("parts", [])}

    return RunnableLambda(_generate)

def make_segment_node(segmenter: Segmenter, text_key: str = SCRIPT_TEXT,
                      count_key: str = SCENE_COUNT):
    """
    Create a LangGraph node that segments script text already in state.

    Args:
        segmenter: Segmenter, e.g. a ScriptSegmenter
        text_key: State key containing the raw script
        count_key: State key containing the requested count (optional)

    Returns:
        RunnableLambda: Node that adds the part list to state
    """
    def _segment(state):
        segmentation = segmenter.split(state.get(text_key, ""), state.get(count_key))
        return {SCRIPTSTUDIO_PARTS: segmentation.texts}

    return RunnableLambda(_segment)
