"""
Work-order summary for an imposition.
Plain-language lines for the production sheet: what goes on the press and how many up.
"""
from .choices import Orientation
from .engine import ImpositionInput, ImpositionResult


def _mm(value) -> str:
    return f"{value:g}"


def describe(data: ImpositionInput, result: ImpositionResult) -> list[str]:
    """Human-readable lines describing the imposition and its result."""
    lines = [
        f"Product (without bleed): {_mm(data.product_width)} × {_mm(data.product_height)} mm",
        f"Bleed: {_mm(data.bleed)} mm",
        f"Sheet: {_mm(data.sheet_width)} × {_mm(data.sheet_height)} mm",
        f"Valid area: {_mm(data.valid_width)} × {_mm(data.valid_height)} mm",
        f"Gutters (H / V): {_mm(data.gutter_h)} / {_mm(data.gutter_v)} mm",
        f"Orientation: {Orientation(result.orientation).label}",
    ]
    # Nothing to impose when either axis fits zero copies
    if result.repetitions_h and result.repetitions_v:
        lines.append(
            f"{result.repetitions_h} × {result.repetitions_v} = "
            f"{result.total_repetitions} per sheet"
        )
    lines.append(f"Utilization: {result.utilization:.1f}%")
    return lines
