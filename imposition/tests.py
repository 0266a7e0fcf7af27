"""Tests for imposition engine, layout scheme and work-order summary."""
from django.test import SimpleTestCase

from .choices import Orientation
from .engine import ImpositionInput, calculate, sheets_needed, update_calculated_values
from .scheme import Rect, build_scheme
from .summary import describe


def make_input(**overrides) -> ImpositionInput:
    """90×50 card, 2mm bleed, on a 500×350 valid area with 3mm gutters."""
    values = {
        "product_width": 90,
        "product_height": 50,
        "bleed": 2,
        "sheet_width": 520,
        "sheet_height": 370,
        "valid_width": 500,
        "valid_height": 350,
        "gutter_h": 3,
        "gutter_v": 3,
    }
    values.update(overrides)
    return ImpositionInput(**values)


def strip(**overrides) -> ImpositionInput:
    """40×10 strip, no bleed or gutters."""
    values = {"product_width": 40, "product_height": 10, "bleed": 0, "gutter_h": 0, "gutter_v": 0}
    values.update(overrides)
    values.setdefault("sheet_width", values["valid_width"])
    values.setdefault("sheet_height", values["valid_height"])
    return ImpositionInput(**values)


class CalculateTests(SimpleTestCase):
    def test_business_card_on_press_sheet(self):
        result = calculate(make_input())
        self.assertEqual(result.repetitions_h, 5)
        self.assertEqual(result.repetitions_v, 6)
        self.assertEqual(result.total_repetitions, 30)
        self.assertEqual(result.orientation, Orientation.HORIZONTAL)
        # 30 × 94 × 54 / (500 × 350)
        self.assertEqual(result.utilization, 87.0)

    def test_square_product_keeps_horizontal(self):
        data = ImpositionInput(100, 100, 0, 300, 300, 300, 300, 0, 0)
        result = calculate(data)
        self.assertEqual((result.repetitions_h, result.repetitions_v), (3, 3))
        self.assertEqual(result.orientation, "horizontal")
        self.assertEqual(result.utilization, 100.0)

    def test_rotation_at_exactly_one_and_a_half_times_stays_horizontal(self):
        """4 up unrotated vs 6 up rotated: not strictly more than 1.5x."""
        result = calculate(strip(valid_width=60, valid_height=45))
        self.assertEqual(result.orientation, "horizontal")
        self.assertEqual((result.repetitions_h, result.repetitions_v), (1, 4))
        self.assertEqual(result.total_repetitions, 4)
        self.assertEqual(result.utilization, 59.3)

    def test_rotation_above_one_and_a_half_times_switches_to_vertical(self):
        """4 up unrotated vs 7 up rotated."""
        result = calculate(strip(valid_width=70, valid_height=45))
        self.assertEqual(result.orientation, "vertical")
        self.assertEqual((result.repetitions_h, result.repetitions_v), (7, 1))
        self.assertEqual(result.total_repetitions, 7)
        self.assertEqual(result.utilization, 88.9)

    def test_gutter_only_between_copies(self):
        """Three 100mm copies with 10mm gutters need exactly 320mm."""
        data = ImpositionInput(100, 100, 0, 320, 100, 320, 100, 10, 10)
        result = calculate(data)
        self.assertEqual(result.repetitions_h, 3)
        self.assertEqual(result.repetitions_v, 1)

    def test_partial_copies_do_not_count(self):
        data = ImpositionInput(100, 100, 0, 299, 299, 299, 299, 0, 0)
        self.assertEqual(calculate(data).total_repetitions, 4)

    def test_utilization_rounds_half_up(self):
        """5 copies of 7×7 on 10×40 cover 61.25%."""
        data = ImpositionInput(7, 7, 0, 10, 40, 10, 40, 0, 0)
        result = calculate(data)
        self.assertEqual(result.total_repetitions, 5)
        self.assertEqual(result.utilization, 61.3)

    def test_same_input_same_result(self):
        data = make_input()
        self.assertEqual(calculate(data), calculate(data))

    def test_input_is_not_modified(self):
        data = make_input()
        calculate(data)
        self.assertEqual(data, make_input())


class DegenerateInputTests(SimpleTestCase):
    def test_negative_gutter_collapsing_pitch_gives_zero_copies(self):
        result = calculate(make_input(gutter_h=-100))
        self.assertEqual(result.repetitions_h, 0)
        self.assertEqual(result.repetitions_v, 6)
        self.assertEqual(result.total_repetitions, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_negative_bleed_larger_than_product(self):
        result = calculate(make_input(bleed=-60))
        self.assertEqual(result.repetitions_h, 0)
        self.assertEqual(result.repetitions_v, 0)
        self.assertEqual(result.total_repetitions, 0)

    def test_zero_product_and_gutter(self):
        data = ImpositionInput(0, 0, 0, 500, 350, 500, 350, 0, 0)
        result = calculate(data)
        self.assertEqual(result.total_repetitions, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_zero_valid_area(self):
        result = calculate(make_input(valid_width=0))
        self.assertEqual(result.repetitions_h, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_negative_valid_area(self):
        result = calculate(make_input(valid_width=-500, valid_height=-350))
        self.assertEqual(result.repetitions_h, 0)
        self.assertEqual(result.repetitions_v, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_overlapping_copies_cap_utilization(self):
        data = ImpositionInput(10, 10, 0, 100, 100, 100, 100, -5, -5)
        result = calculate(data)
        self.assertEqual(result.total_repetitions, 19 * 19)
        self.assertEqual(result.utilization, 100.0)

    def test_quotient_overflowing_to_infinity_gives_zero_copies(self):
        data = ImpositionInput(1e-10, 1e-10, 0, 1e300, 1e300, 1e300, 1e300, 0, 0)
        result = calculate(data)
        self.assertEqual(result.repetitions_h, 0)
        self.assertEqual(result.repetitions_v, 0)
        self.assertEqual(result.total_repetitions, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_huge_finite_counts(self):
        """Counts beyond float range still compare and multiply."""
        data = ImpositionInput(1e-100, 1e-100, 0, 1e100, 1e100, 1e100, 1e100, 0, 0)
        result = calculate(data)
        self.assertGreater(result.repetitions_h, 0)
        self.assertEqual(result.total_repetitions, result.repetitions_h * result.repetitions_v)
        self.assertEqual(result.orientation, "horizontal")
        self.assertEqual(result.utilization, 100.0)

    def test_nan_product_width(self):
        result = calculate(make_input(product_width=float("nan")))
        self.assertEqual(result.total_repetitions, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_nan_valid_area(self):
        result = calculate(make_input(valid_width=float("nan")))
        self.assertEqual(result.repetitions_h, 0)
        self.assertEqual(result.utilization, 0.0)

    def test_counts_never_negative(self):
        cases = [
            make_input(gutter_h=-100, gutter_v=-100),
            make_input(product_width=-90, product_height=-50),
            make_input(valid_width=-1, gutter_h=0),
            make_input(bleed=-100, gutter_h=500, gutter_v=500),
        ]
        for data in cases:
            result = calculate(data)
            self.assertGreaterEqual(result.repetitions_h, 0)
            self.assertGreaterEqual(result.repetitions_v, 0)
            self.assertEqual(result.total_repetitions, result.repetitions_h * result.repetitions_v)
            self.assertGreaterEqual(result.utilization, 0)
            self.assertLessEqual(result.utilization, 100)


class UpdateCalculatedValuesTests(SimpleTestCase):
    def test_merges_fresh_result_over_stale_values(self):
        stored = {
            **make_input().as_dict(),
            "repetitions_h": 1,
            "repetitions_v": 1,
            "total_repetitions": 1,
            "utilization": 3.0,
            "orientation": "vertical",
            "notes": "Cut after lamination",
        }
        updated = update_calculated_values(stored)
        self.assertEqual(updated["total_repetitions"], 30)
        self.assertEqual(updated["orientation"], "horizontal")
        self.assertEqual(updated["utilization"], 87.0)
        self.assertEqual(updated["notes"], "Cut after lamination")
        self.assertEqual(updated["product_width"], 90)
        # Original dict untouched
        self.assertEqual(stored["total_repetitions"], 1)

    def test_missing_fields_count_as_zero(self):
        updated = update_calculated_values({"product_width": 90, "product_height": 50})
        self.assertEqual(updated["total_repetitions"], 0)
        self.assertEqual(updated["utilization"], 0.0)


class SheetsNeededTests(SimpleTestCase):
    def test_rounds_up(self):
        self.assertEqual(sheets_needed(100, 30), 4)
        self.assertEqual(sheets_needed(90, 30), 3)

    def test_at_least_one_sheet(self):
        self.assertEqual(sheets_needed(0, 30), 1)

    def test_nothing_fits(self):
        self.assertEqual(sheets_needed(50, 0), 50)


class SchemeTests(SimpleTestCase):
    def test_cells_centred_in_valid_area(self):
        scheme = build_scheme(make_input())
        self.assertEqual(scheme.sheet, Rect(0, 0, 520, 370))
        self.assertEqual(scheme.valid_area, Rect(10, 10, 500, 350))
        self.assertEqual(len(scheme.cells), 30)

        first = scheme.cells[0]
        self.assertEqual((first.row, first.col), (0, 0))
        # Block of 5 × 94 + 4 × 3 = 482 wide, 6 × 54 + 5 × 3 = 339 high
        self.assertEqual(first.footprint, Rect(19, 15.5, 94, 54))
        self.assertEqual(first.trim, Rect(21, 17.5, 90, 50))

        last = scheme.cells[-1]
        self.assertEqual((last.row, last.col), (5, 4))
        self.assertEqual(last.footprint, Rect(407, 300.5, 94, 54))

    def test_cells_inside_valid_area(self):
        scheme = build_scheme(make_input())
        valid = scheme.valid_area
        for cell in scheme.cells:
            box = cell.footprint
            self.assertGreaterEqual(box.x, valid.x)
            self.assertGreaterEqual(box.y, valid.y)
            self.assertLessEqual(box.x + box.width, valid.x + valid.width)
            self.assertLessEqual(box.y + box.height, valid.y + valid.height)

    def test_rotated_cells(self):
        scheme = build_scheme(strip(valid_width=70, valid_height=45))
        self.assertEqual(scheme.orientation, "vertical")
        self.assertEqual(len(scheme.cells), 7)
        self.assertEqual(scheme.cells[0].footprint, Rect(0, 2.5, 10, 40))
        self.assertEqual(scheme.cells[6].footprint, Rect(60, 2.5, 10, 40))

    def test_no_cells_when_nothing_fits(self):
        scheme = build_scheme(make_input(gutter_h=-100))
        self.assertEqual(scheme.cells, [])

    def test_uses_given_result(self):
        data = make_input()
        scheme = build_scheme(data, calculate(strip(valid_width=70, valid_height=45)))
        self.assertEqual(len(scheme.cells), 7)

    def test_as_dict(self):
        payload = build_scheme(make_input()).as_dict()
        self.assertEqual(payload["orientation"], "horizontal")
        self.assertEqual(payload["cells"][0]["trim"], {"x": 21, "y": 17.5, "width": 90, "height": 50})


class DescribeTests(SimpleTestCase):
    def test_lines(self):
        data = make_input()
        lines = describe(data, calculate(data))
        self.assertIn("Product (without bleed): 90 × 50 mm", lines)
        self.assertIn("Valid area: 500 × 350 mm", lines)
        self.assertIn("Gutters (H / V): 3 / 3 mm", lines)
        self.assertIn("Orientation: Horizontal", lines)
        self.assertIn("5 × 6 = 30 per sheet", lines)
        self.assertEqual(lines[-1], "Utilization: 87.0%")

    def test_no_per_sheet_line_when_nothing_fits(self):
        data = make_input(gutter_h=-100)
        lines = describe(data, calculate(data))
        self.assertFalse(any("per sheet" in line for line in lines))
        self.assertEqual(lines[-1], "Utilization: 0.0%")
