"""Default state key names for LangGraph integration."""

# Inputs read by Script Studio nodes
IDEA = "idea"
SCENE_COUNT = "scene_count"
SCRIPT_TEXT = "script_text"

# Outputs written by Script Studio nodes
SCRIPTSTUDIO_SCRIPT = "scriptstudio_script"
SCRIPTSTUDIO_PARTS = "scriptstudio_parts"
