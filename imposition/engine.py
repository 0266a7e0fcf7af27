"""
Imposition engine for sheet-printed products.
Grid fit of a bleed-expanded product on the valid (printable) area of a sheet,
with gutters between copies and an optional 90° rotation.
"""
import logging
from dataclasses import asdict, dataclass, fields
from decimal import ROUND_HALF_UP, Decimal
from math import ceil, floor, isfinite
from typing import Mapping

from .choices import Orientation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImpositionInput:
    """Product, sheet and spacing measurements. All values share one unit (mm)."""

    product_width: float
    product_height: float
    bleed: float
    sheet_width: float
    sheet_height: float
    valid_width: float
    valid_height: float
    gutter_h: float
    gutter_v: float

    @classmethod
    def from_dict(cls, data: Mapping) -> "ImpositionInput":
        """Build from a dict; missing or empty measurements count as 0."""
        return cls(**{f.name: data.get(f.name) or 0 for f in fields(cls)})

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ImpositionResult:
    repetitions_h: int
    repetitions_v: int
    total_repetitions: int
    utilization: float
    orientation: str

    def as_dict(self) -> dict:
        return asdict(self)


def _fit(available: float, size: float, gutter: float) -> int:
    """Copies of `size` that fit in `available` with `gutter` between neighbours."""
    pitch = size + gutter
    if pitch <= 0:
        return 0
    quotient = (available + gutter) / pitch
    if not isfinite(quotient):
        return 0
    return max(0, floor(quotient))


def _round_percent(value: float) -> float:
    """Round half up to one decimal place. Non-finite values count as 0."""
    if not isfinite(value):
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calculate(data: ImpositionInput) -> ImpositionResult:
    """
    Compute copies per sheet for both orientations and pick one.
    Unrotated wins unless rotating yields more than 1.5x the copies.
    """
    width = data.product_width + 2 * data.bleed
    height = data.product_height + 2 * data.bleed

    # Product as drawn
    h_normal = _fit(data.valid_width, width, data.gutter_h)
    v_normal = _fit(data.valid_height, height, data.gutter_v)
    total_normal = h_normal * v_normal

    # Rotated 90°
    h_rotated = _fit(data.valid_width, height, data.gutter_h)
    v_rotated = _fit(data.valid_height, width, data.gutter_v)
    total_rotated = h_rotated * v_rotated

    # Rotated wins above 1.5x; compared in integers so huge counts cannot overflow
    use_rotated = 2 * total_rotated > 3 * total_normal
    logger.debug(
        "Imposition candidates: normal=%s rotated=%s -> %s",
        total_normal,
        total_rotated,
        "rotated" if use_rotated else "normal",
    )

    if use_rotated:
        reps_h, reps_v = h_rotated, v_rotated
        used_width, used_height = height, width
    else:
        reps_h, reps_v = h_normal, v_normal
        used_width, used_height = width, height
    total = reps_h * reps_v

    valid_area = data.valid_width * data.valid_height
    utilization = 0.0
    if data.valid_width > 0 and data.valid_height > 0 and valid_area > 0:
        # Float products overflow to inf rather than raising
        used_area = (reps_h * used_width) * (reps_v * used_height)
        utilization = min(100.0, max(0.0, _round_percent(used_area / valid_area * 100)))

    return ImpositionResult(
        repetitions_h=reps_h,
        repetitions_v=reps_v,
        total_repetitions=total,
        utilization=utilization,
        orientation=Orientation.VERTICAL.value if use_rotated else Orientation.HORIZONTAL.value,
    )


def update_calculated_values(data: Mapping) -> dict:
    """
    Return a copy of an imposition dict with freshly calculated result fields.
    Previously calculated fields in `data` are overwritten; `data` is not modified.
    """
    result = calculate(ImpositionInput.from_dict(data))
    return {**data, **result.as_dict()}


def sheets_needed(quantity: int, copies_per_sheet: int) -> int:
    """Sheets needed = ceil(quantity / copies_per_sheet)."""
    if copies_per_sheet <= 0:
        return max(1, quantity)
    return max(1, ceil(quantity / copies_per_sheet))
