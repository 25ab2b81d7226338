"""Fixed product constants shared by the card and folder engines."""

from typing import Dict, List

# Canonical logical canvas every card face is authored against.
CANVAS_WIDTH = 300
CANVAS_HEIGHT = 200

STUDY_CARD_COLORS: List[str] = [
    "#7EC4FF",  # sc-blue
    "#6EE7B7",  # sc-green
    "#FFF58F",  # sc-yellow
    "#FFD085",  # sc-orange
    "#FF8FA3",  # sc-pink
    "#BFA7FF",  # sc-purple
    "#60EFFF",  # sc-turquoise
    "#FF8787",  # sc-red
]

COLOR_NAMES: Dict[str, str] = {
    "#7EC4FF": "Blau",
    "#6EE7B7": "Grün",
    "#FFF58F": "Gelb",
    "#FFD085": "Orange",
    "#FF8FA3": "Pink",
    "#BFA7FF": "Lila",
    "#60EFFF": "Türkis",
    "#FF8787": "Rot",
}

# Characters that may not appear in a folder name.
FORBIDDEN_FOLDER_NAME_CHARS = '<>:"/\\|?*'

DEFAULT_TEXT_STYLE = {
    "font_size": 16,
    "font_weight": "normal",
    "font_style": "normal",
    "color": "#000000",
    "text_align": "left",
}

DEFAULT_ELEMENT_POSITION = (50, 50)
DEFAULT_TEXT_SIZE = (200, 40)
DEFAULT_IMAGE_SIZE = (150, 100)
