"""
Deserialization boundary for stored card faces.

Face content has been stored in two shapes over time: a bare JSON array of
elements, or an object wrapping that array in an ``elements`` field. Both are
normalized here into a ``CardFace`` so the engine only ever sees one
representation.
"""

import json
import logging
from typing import Any, Dict, List, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import CardContentError
from ..models import CardElement, CardFace, Flashcard


class WrappedFaceContent(BaseModel):
    """The object-wrapped storage shape: ``{"elements": [...]}``."""

    elements: List[CardElement]


StoredFaceContent = Union[List[CardElement], WrappedFaceContent]

_stored_face_adapter: TypeAdapter = TypeAdapter(StoredFaceContent)


def parse_face_content(raw: Any) -> CardFace:
    """
    Normalize stored face content into a ``CardFace``.

    Args:
        raw: A list of element dicts, a dict with an ``elements`` list, a JSON
            string holding either of those, or None

    Returns:
        The face. Shapes that are neither variant (None, a dict without
        ``elements``, a scalar) give an empty face.

    Raises:
        CardContentError: If a recognized shape holds malformed elements, or
            a string is not valid JSON
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CardContentError(f"Face content is not valid JSON: {e}") from e

    if not isinstance(raw, list) and not (isinstance(raw, dict) and "elements" in raw):
        if raw is not None:
            logging.warning(f"Unrecognized face content shape {type(raw).__name__}; treating as empty")
        return CardFace()

    try:
        content = _stored_face_adapter.validate_python(raw)
    except ValidationError as e:
        raise CardContentError(f"Malformed card element: {e}") from e

    if isinstance(content, WrappedFaceContent):
        return CardFace(elements=content.elements)
    return CardFace(elements=content)


def dump_face_content(face: CardFace) -> List[Dict[str, Any]]:
    """Serialize a face to the canonical bare-array shape with camelCase keys."""
    return [
        element.model_dump(mode="json", by_alias=True, exclude_none=True)
        for element in face.elements
    ]


def parse_flashcard(row: Dict[str, Any]) -> Flashcard:
    """
    Build a ``Flashcard`` from a stored row.

    Args:
        row: Mapping with ``front_content``/``back_content`` plus the
            flashcard columns

    Returns:
        The flashcard with both faces normalized
    """
    fields = {
        key: value for key, value in row.items()
        if key not in ("front_content", "back_content") and value is not None
    }
    return Flashcard(
        front=parse_face_content(row.get("front_content")),
        back=parse_face_content(row.get("back_content")),
        **fields
    )
