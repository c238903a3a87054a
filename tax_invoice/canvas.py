"""Drawing surface that records layout primitives for one page.

Section composers address the page in top-down cursor space (``y`` grows
downwards from the top edge). Every primitive is stored in page space, with
the origin at the bottom-left corner, converted with ``page_height - y`` at the
moment it is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Union

from .formatting import TextWidthProvider
from .pdf_constants import BORDER_WIDTH, PAGE_H, PAGE_W

if TYPE_CHECKING:
    from .assets import ImageHandle


@dataclass(frozen=True)
class TextRun:
    x: float
    y: float
    text: str
    size: float
    bold: bool = False


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float = BORDER_WIDTH


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    thickness: float = BORDER_WIDTH


@dataclass(frozen=True)
class ImageRun:
    x: float
    y: float
    width: float
    height: float
    image: "ImageHandle"


Instruction = Union[TextRun, Line, Rect, ImageRun]


class Canvas:
    def __init__(self, fonts: TextWidthProvider, width: float = PAGE_W, height: float = PAGE_H) -> None:
        self.fonts = fonts
        self.width = width
        self.height = height
        self.instructions: List[Instruction] = []

    def page_y(self, y: float) -> float:
        return self.height - y

    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        return self.fonts.text_width(text, size, bold=bold)

    def draw_text(self, x: float, baseline: float, text: str, size: float, bold: bool = False) -> None:
        if not text:
            return
        self.instructions.append(TextRun(x, self.page_y(baseline), text, size, bold))

    def draw_text_right(self, right: float, baseline: float, text: str, size: float, bold: bool = False) -> None:
        self.draw_text(right - self.text_width(text, size, bold=bold), baseline, text, size, bold=bold)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.instructions.append(Line(x1, self.page_y(y1), x2, self.page_y(y2)))

    def draw_rect(self, x: float, top: float, width: float, height: float) -> None:
        self.instructions.append(Rect(x, self.page_y(top + height), width, height))

    def draw_image(self, image: "ImageHandle", x: float, top: float, width: float, height: float) -> None:
        self.instructions.append(ImageRun(x, self.page_y(top + height), width, height, image))

    def of_type(self, kind: type) -> List[Instruction]:
        return [instruction for instruction in self.instructions if isinstance(instruction, kind)]
