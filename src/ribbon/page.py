"""SVG page the ribbon text is drawn on."""

from __future__ import annotations

import copy
import io
from dataclasses import dataclass
from typing import Union

import svgwrite
import svgwrite.base
import svgwrite.container
import svgwrite.elementfactory
from svgwrite.extensions import Inkscape


@dataclass
class RibbonSvgPage:
    """A page (canvas) described by SVG in device pixels.

    Unlike a print page the coordinate-system is the one of a canvas:
    origin top-left, x left-to-right, y top-to-bottom.
    Contains a layer:
        - main   -- editable->locked=False
    """

    _inkscape: Inkscape  # extension to support layers

    drawing: svgwrite.Drawing
    main_layer: svgwrite.container.Group

    def __init__(self, width_px: float, height_px: float):
        """
        Initialize the SVG page.

        Args:
            width_px (float): The width of the page in pixels.
            height_px (float): The height of the page in pixels.
        """
        # profile="full" to support numbers with more than 4 decimal digits
        self.drawing = svgwrite.Drawing(
            size=(f"{width_px}px", f"{height_px}px"),
            viewBox=f"0 0 {width_px} {height_px}",
            profile="full",
        )

        self._inkscape = Inkscape(self.drawing)
        self.main_layer = self._inkscape.layer(label="main", locked=False)

    def add(
        self,
        element: Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder],
    ) -> Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder]:
        """Add a SVG element as subelement to the main layer.

        Args:
            element (svgwrite.base.BaseElement): append this SVG element

        Returns:
            svgwrite.base.BaseElement: the added element
        """
        return self.main_layer.add(element)

    def tostring(self, pretty: bool = False, indent: int = 2) -> str:
        """Returns the SVG document as string.

        Args:
            pretty (bool, optional): True for easy readable output. Defaults to False.
            indent (int, optional): Indention if pretty is enabled. Defaults to 2 spaces.
        """
        drawing = copy.deepcopy(self.drawing)
        drawing.add(copy.deepcopy(self.main_layer))

        svg_buffer = io.StringIO()
        drawing.write(svg_buffer, pretty=pretty, indent=indent)
        return svg_buffer.getvalue()
