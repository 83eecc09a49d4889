"""
Centralized constants for commitlanes.

Lane palette, settings location and walk limits live here so the graph core,
the Qt layer and the text renderer agree on them.
"""

# Lane colors, indexed by lane position modulo PALETTE_SIZE
LANE_COLOR_HEX = [
    "#42a5f5",  # Blue
    "#ef5350",  # Red
    "#78909c",  # Blue grey
    "#ff7043",  # Orange
    "#66bb6a",  # Green
    "#ec407a",  # Pink
]
PALETTE_SIZE = len(LANE_COLOR_HEX)

# Settings file location, relative to the user's home directory
SETTINGS_RELATIVE_PATH = ".config/commitlanes/settings.json"

# Default number of commits loaded into the graph
DEFAULT_MAX_COMMITS = 10000
