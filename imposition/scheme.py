"""
Layout scheme for previewing an imposition.
Places every copy of a calculated result on the sheet: the valid area is centred on
the sheet and the block of copies is centred in the valid area.
"""
from dataclasses import asdict, dataclass, field
from typing import Optional

from .choices import Orientation
from .engine import ImpositionInput, ImpositionResult, calculate


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Cell:
    """One copy: bleed-expanded footprint plus the trim box inside it."""

    row: int
    col: int
    footprint: Rect
    trim: Rect


@dataclass(frozen=True)
class LayoutScheme:
    sheet: Rect
    valid_area: Rect
    orientation: str
    cells: list[Cell] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


def build_scheme(data: ImpositionInput, result: Optional[ImpositionResult] = None) -> LayoutScheme:
    """Build the layout for `result`, calculating it from `data` when not given."""
    if result is None:
        result = calculate(data)

    sheet = Rect(0, 0, data.sheet_width, data.sheet_height)
    valid = Rect(
        (data.sheet_width - data.valid_width) / 2,
        (data.sheet_height - data.valid_height) / 2,
        data.valid_width,
        data.valid_height,
    )

    rotated = result.orientation == Orientation.VERTICAL
    trim_w, trim_h = data.product_width, data.product_height
    if rotated:
        trim_w, trim_h = trim_h, trim_w
    cell_w = trim_w + 2 * data.bleed
    cell_h = trim_h + 2 * data.bleed

    cols, rows = result.repetitions_h, result.repetitions_v
    cells = []
    if cols > 0 and rows > 0:
        block_w = cols * cell_w + (cols - 1) * data.gutter_h
        block_h = rows * cell_h + (rows - 1) * data.gutter_v
        origin_x = valid.x + (valid.width - block_w) / 2
        origin_y = valid.y + (valid.height - block_h) / 2
        for row in range(rows):
            for col in range(cols):
                x = origin_x + col * (cell_w + data.gutter_h)
                y = origin_y + row * (cell_h + data.gutter_v)
                cells.append(
                    Cell(
                        row=row,
                        col=col,
                        footprint=Rect(x, y, cell_w, cell_h),
                        trim=Rect(x + data.bleed, y + data.bleed, trim_w, trim_h),
                    )
                )

    return LayoutScheme(sheet=sheet, valid_area=valid, orientation=result.orientation, cells=cells)
