"""Prompt construction for script generation providers."""

from ..core.util import round_half_up

SECONDS_PER_SCENE = 6

def build_script_prompt(idea: str, amount: int, label: str = "Scene") -> str:
    """
    Build the writer instructions for an idea and a scene count.

    Scene labels in the instructions match the marker label the segmenter
    looks for, so well-behaved output takes the marker path.
    """
    minutes = max(1, round_half_up(amount * SECONDS_PER_SCENE / 60))
    system_text = (
        f"You are an expert AI video-script writer. The user will give you a short idea and you must "
        f"produce a professional, production-ready video script with EXACTLY {amount} scenes.\n\n"
        f"RULES YOU MUST FOLLOW:\n"
        f"1. Output EXACTLY {amount} scenes — no more, no less.\n"
        f"2. Label every scene as \"{label} 1:\", \"{label} 2:\", etc., each on its own line.\n"
        f"3. Each scene MUST contain 3–5 sentences (40–80 words minimum) including:\n"
        f"   - A narrator line (what is spoken aloud in the video).\n"
        f"   - A visual note in brackets, e.g. [Show a close-up of hands typing on a keyboard].\n"
        f"4. Scenes must flow logically from one to the next. Use transitions, callbacks, and a consistent tone "
        f"so the script feels like ONE cohesive video, not a random list.\n"
        f"5. The script must have a clear structure: hook/intro → main body → conclusion/call-to-action.\n"
        f"6. Write in a conversational, engaging tone suitable for a YouTube or TikTok audience.\n"
        f"7. Do NOT add any extra commentary, markdown formatting, or text outside of the scenes.\n"
        f"8. The total script should be long enough for roughly {minutes} minutes of video "
        f"(assume ~{SECONDS_PER_SCENE} seconds per scene on average)."
    )
    return f"{system_text}\n\nUser idea: {idea}"
