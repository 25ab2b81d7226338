"""Card face content: element mutation, stacking order and canvas layout."""

from .canvas import ElementLayout, layout_element, to_percent
from .engine import (
    FaceRender,
    add_element,
    delete_element,
    move_element,
    new_image_element,
    new_text_element,
    render,
    update_element,
)
from .serialization import dump_face_content, parse_face_content, parse_flashcard

__all__ = [
    "ElementLayout",
    "layout_element",
    "to_percent",
    "FaceRender",
    "add_element",
    "delete_element",
    "move_element",
    "new_image_element",
    "new_text_element",
    "render",
    "update_element",
    "dump_face_content",
    "parse_face_content",
    "parse_flashcard"
]
