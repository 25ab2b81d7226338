"""
Coordinate mapping between the logical card canvas and rendered output.

Cards are authored on a fixed 300x200 logical canvas. Renderers place elements
using percentages of that canvas so the same data displays correctly at any
size or zoom level.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel

from ..config import config
from ..constants import CANVAS_HEIGHT, CANVAS_WIDTH, DEFAULT_TEXT_STYLE
from ..models import CardElement


def to_percent(value: float, axis_extent: float) -> float:
    """
    Express a logical coordinate as a percentage of an axis.

    Values outside ``[0, axis_extent]`` are not clamped.

    Args:
        value: Logical coordinate or length
        axis_extent: Length of the axis in logical units

    Returns:
        ``value / axis_extent * 100``
    """
    return value / axis_extent * 100


def font_size_percent(font_size: float) -> float:
    """Font size as a percentage of the canvas height."""
    return to_percent(font_size, CANVAS_HEIGHT)


class ElementLayout(BaseModel):
    """
    The resolution-independent box of one element, in percent of the canvas.
    """

    id: str
    left: float
    top: float
    width: float
    height: float
    rotation: float = 0
    z_index: int = 0
    font_size: Optional[float] = None

    def css(self) -> Dict[str, str]:
        """
        Render the box as CSS declarations.

        The font size uses ``cqh`` (1% of the container height), which keeps
        text proportional to the rendered canvas.
        """
        declarations = {
            "position": "absolute",
            "left": _pct(self.left),
            "top": _pct(self.top),
            "width": _pct(self.width),
            "height": _pct(self.height),
            "transform": f"rotate({self.rotation:g}deg)",
            "z-index": str(self.z_index),
        }
        if self.font_size is not None:
            declarations["font-size"] = f"{round(self.font_size, 4):g}cqh"
        return declarations


def layout_element(element: CardElement) -> ElementLayout:
    """
    Map an element's logical geometry onto percentages of the canvas.

    Args:
        element: The element to place

    Returns:
        Its layout box; ``font_size`` is only set for text elements
    """
    font_size = None
    if element.is_text:
        size = element.style.font_size if element.style else DEFAULT_TEXT_STYLE["font_size"]
        font_size = font_size_percent(size)

    return ElementLayout(
        id=element.id,
        left=to_percent(element.position.x, CANVAS_WIDTH),
        top=to_percent(element.position.y, CANVAS_HEIGHT),
        width=to_percent(element.size.width, CANVAS_WIDTH),
        height=to_percent(element.size.height, CANVAS_HEIGHT),
        rotation=element.rotation,
        z_index=element.z_index or 0,
        font_size=font_size,
    )


def clamp_zoom(zoom: int, min_zoom: Optional[int] = None, max_zoom: Optional[int] = None) -> int:
    """Clamp an editor zoom level (percent) to the configured range."""
    low = config.min_zoom if min_zoom is None else min_zoom
    high = config.max_zoom if max_zoom is None else max_zoom
    return max(low, min(high, zoom))


def scaled_canvas_size(zoom: int) -> Tuple[float, float]:
    """
    Pixel size of the editor canvas at a zoom level.

    Args:
        zoom: Zoom level in percent, 100 being 1:1

    Returns:
        (width, height) in pixels
    """
    factor = zoom / 100
    return CANVAS_WIDTH * factor, CANVAS_HEIGHT * factor


def _pct(value: float) -> str:
    return f"{round(value, 4):g}%"
