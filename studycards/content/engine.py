"""
Card content engine.

Mutation primitives for the elements on one card face, shared by the editor
(read-write) and the viewer (read-only). Every mutation returns a new
``CardFace`` and leaves its input untouched, so callers can keep the previous
face around for undo or diffing.
"""

import uuid
from typing import Any, Dict, Iterator, List, Optional

from ..constants import (
    DEFAULT_ELEMENT_POSITION,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_TEXT_SIZE,
    DEFAULT_TEXT_STYLE,
)
from ..errors import DuplicateElementError
from ..models import CardElement, CardFace, Position, Size, TextStyle

# alias -> field name, so partial updates may use either spelling
_FIELD_NAMES: Dict[str, str] = {
    (info.alias or name): name for name, info in CardElement.model_fields.items()
}


def add_element(face: CardFace, element: CardElement) -> CardFace:
    """
    Append an element to a face.

    An element without a ``z_index`` is stacked on top, at the current
    element count.

    Args:
        face: The face to add to
        element: The new element; its id must not already be on the face

    Returns:
        A new face with the element appended

    Raises:
        DuplicateElementError: If the id is already used on this face
    """
    if face.get(element.id) is not None:
        raise DuplicateElementError(element.id)

    if element.z_index is None:
        element = element.model_copy(update={"z_index": len(face.elements)})
    return CardFace(elements=[*face.elements, element])


def update_element(face: CardFace, element_id: str, **changes: Any) -> CardFace:
    """
    Merge field values into one element.

    Nested values (``position``, ``size``, ``style``) replace the whole
    sub-object. An unknown ``element_id`` is not an error: the face comes back
    unchanged, since an update may race with a delete in the editor.

    Args:
        face: The face holding the element
        element_id: Id of the element to change
        **changes: Field values, by attribute name or JSON alias

    Returns:
        A new face with the merged element in place
    """
    updates = {_FIELD_NAMES.get(key, key): value for key, value in changes.items()}
    updates.pop("id", None)

    elements: List[CardElement] = []
    for element in face.elements:
        if element.id == element_id:
            merged = element.model_dump()
            merged.update(updates)
            element = CardElement.model_validate(merged)
        elements.append(element)
    return CardFace(elements=elements)


def delete_element(face: CardFace, element_id: str) -> CardFace:
    """Remove an element; unknown ids leave the face unchanged."""
    return CardFace(elements=[e for e in face.elements if e.id != element_id])


def move_element(face: CardFace, element_id: str, delta_x: float, delta_y: float) -> CardFace:
    """
    Shift an element by a relative offset.

    The resulting coordinates are clamped at 0. There is no upper bound, so an
    element may be dragged past the right or bottom edge.
    """
    element = face.get(element_id)
    if element is None:
        return face.model_copy(deep=True)

    position = Position(
        x=max(0, element.position.x + delta_x),
        y=max(0, element.position.y + delta_y),
    )
    return update_element(face, element_id, position=position)


class FaceRender:
    """
    Elements of a face in stacking order.

    Each iteration sorts afresh by ascending ``z_index`` (missing counts as 0)
    with ties kept in insertion order, and yields copies: changing what comes
    out does not touch the face.
    """

    def __init__(self, face: CardFace):
        self._elements = list(face.elements)

    def __iter__(self) -> Iterator[CardElement]:
        ordered = sorted(self._elements, key=lambda e: e.z_index or 0)
        for element in ordered:
            yield element.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._elements)


def render(face: CardFace) -> FaceRender:
    """Return the face's elements as a restartable, z-ordered sequence."""
    return FaceRender(face)


def new_text_element(
    content: str,
    element_id: Optional[str] = None,
    x: float = DEFAULT_ELEMENT_POSITION[0],
    y: float = DEFAULT_ELEMENT_POSITION[1],
    style: Optional[TextStyle] = None
) -> CardElement:
    """
    Build a text element with the editor's defaults.

    Args:
        content: The text
        element_id: Explicit id; a fresh ``text-...`` id when omitted
        x: Left edge in logical units
        y: Top edge in logical units
        style: Typography; the default text style when omitted

    Returns:
        An element without a z_index, ready for ``add_element``
    """
    return CardElement(
        id=element_id or f"text-{uuid.uuid4().hex}",
        kind="text",
        content=content,
        position=Position(x=x, y=y),
        size=Size(width=DEFAULT_TEXT_SIZE[0], height=DEFAULT_TEXT_SIZE[1]),
        style=style or TextStyle(**DEFAULT_TEXT_STYLE),
    )


def new_image_element(
    uri: str,
    element_id: Optional[str] = None,
    x: float = DEFAULT_ELEMENT_POSITION[0],
    y: float = DEFAULT_ELEMENT_POSITION[1]
) -> CardElement:
    """Build an image element with the editor's default size."""
    return CardElement(
        id=element_id or f"image-{uuid.uuid4().hex}",
        kind="image",
        content=uri,
        position=Position(x=x, y=y),
        size=Size(width=DEFAULT_IMAGE_SIZE[0], height=DEFAULT_IMAGE_SIZE[1]),
    )
