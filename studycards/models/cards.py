"""
Card content models for StudyCards.

A card face is a free canvas: every text or image placed on it is a
``CardElement`` with an absolute position in logical canvas units. Field
names are snake_case in Python and camelCase on the JSON boundary.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_TEXT_STYLE


class Position(BaseModel):
    """Top-left corner of an element in logical canvas units."""

    x: float = Field(..., description="Horizontal offset from the canvas' left edge")
    y: float = Field(..., description="Vertical offset from the canvas' top edge")


class Size(BaseModel):
    """Element extent in logical canvas units."""

    width: float = Field(..., description="Width in logical units")
    height: float = Field(..., description="Height in logical units")


class TextStyle(BaseModel):
    """Typography of a text element."""

    model_config = ConfigDict(populate_by_name=True)

    font_size: float = Field(
        default=DEFAULT_TEXT_STYLE["font_size"],
        alias="fontSize",
        description="Font size in logical pixels"
    )

    font_weight: str = Field(default=DEFAULT_TEXT_STYLE["font_weight"], alias="fontWeight")

    font_style: str = Field(default=DEFAULT_TEXT_STYLE["font_style"], alias="fontStyle")

    color: str = Field(default=DEFAULT_TEXT_STYLE["color"])

    background_color: Optional[str] = Field(
        default=None,
        alias="backgroundColor",
        description="Background fill; transparent when absent"
    )

    text_align: Literal["left", "center", "right"] = Field(default=DEFAULT_TEXT_STYLE["text_align"], alias="textAlign")


class CardElement(BaseModel):
    """
    A single text or image unit positioned on a card face.

    Size and position are deliberately not range checked: existing cards
    contain elements that hang over the canvas edge.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        ...,
        description="Identifier, unique within one face and stable across edits"
    )

    kind: Literal["text", "image"] = Field(
        ...,
        alias="type",
        description="Whether content is literal text or an image reference"
    )

    content: str = Field(
        default="",
        description="The text itself, or the URI of the image"
    )

    position: Position

    size: Size

    rotation: float = Field(
        default=0,
        description="Clockwise rotation in degrees, any value"
    )

    z_index: Optional[int] = Field(
        default=None,
        alias="zIndex",
        description="Stacking order; assigned when the element is added to a face"
    )

    style: Optional[TextStyle] = Field(
        default=None,
        description="Typography, only meaningful for text elements"
    )

    @property
    def is_text(self) -> bool:
        return self.kind == "text"


class CardFace(BaseModel):
    """One side of a flashcard: its elements in insertion order."""

    elements: List[CardElement] = Field(default_factory=list)

    def get(self, element_id: str) -> Optional[CardElement]:
        """Return the element with ``element_id`` or None."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None


class Flashcard(BaseModel):
    """
    A flashcard with exactly two faces.
    """

    id: Optional[str] = Field(
        default=None,
        description="Primary key, assigned by the store on insert"
    )

    card_set_id: str = Field(..., description="The card set this card belongs to")

    front: CardFace = Field(default_factory=CardFace)

    back: CardFace = Field(default_factory=CardFace)

    order_index: int = 0

    difficulty_level: int = 0

    review_count: int = 0

    last_reviewed: Optional[datetime] = None

    next_review: Optional[datetime] = None
