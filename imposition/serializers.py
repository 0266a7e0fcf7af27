"""
Imposition request/response serializers.
Validate shape only: zero or negative measurements are passed through to the engine,
which defines a result for them.
"""
from django.conf import settings
from rest_framework import serializers

from .choices import Orientation, SheetSize, SHEET_SIZE_DIMENSIONS
from .engine import ImpositionInput


def _default_bleed():
    return getattr(settings, "IMPOSITION_DEFAULT_BLEED_MM", 3)


def _default_gutter():
    return getattr(settings, "IMPOSITION_DEFAULT_GUTTER_MM", 0)


class ImpositionRequestSerializer(serializers.Serializer):
    """
    Product, sheet and gutter measurements in mm.
    Sheet size comes from explicit sheet_width/sheet_height or a sheet_size preset;
    the valid area defaults to the whole sheet.
    """

    product_width = serializers.FloatField()
    product_height = serializers.FloatField()
    bleed = serializers.FloatField(required=False)
    sheet_size = serializers.ChoiceField(choices=SheetSize.choices, required=False)
    sheet_width = serializers.FloatField(required=False)
    sheet_height = serializers.FloatField(required=False)
    valid_width = serializers.FloatField(required=False)
    valid_height = serializers.FloatField(required=False)
    gutter_h = serializers.FloatField(required=False)
    gutter_v = serializers.FloatField(required=False)
    quantity = serializers.IntegerField(required=False, min_value=1)

    def validate(self, attrs):
        sheet_width = attrs.get("sheet_width")
        sheet_height = attrs.get("sheet_height")
        preset = attrs.get("sheet_size")
        if preset:
            preset_w, preset_h = SHEET_SIZE_DIMENSIONS[preset]
            sheet_width = preset_w if sheet_width is None else sheet_width
            sheet_height = preset_h if sheet_height is None else sheet_height

        errors = {}
        if sheet_width is None:
            errors["sheet_width"] = "Provide sheet_width or a sheet_size preset."
        if sheet_height is None:
            errors["sheet_height"] = "Provide sheet_height or a sheet_size preset."
        if errors:
            raise serializers.ValidationError(errors)

        attrs["sheet_width"] = sheet_width
        attrs["sheet_height"] = sheet_height
        attrs.setdefault("valid_width", sheet_width)
        attrs.setdefault("valid_height", sheet_height)
        attrs.setdefault("bleed", _default_bleed())
        attrs.setdefault("gutter_h", _default_gutter())
        attrs.setdefault("gutter_v", _default_gutter())
        return attrs

    def to_input(self) -> ImpositionInput:
        """ImpositionInput from validated data. Call after is_valid()."""
        return ImpositionInput.from_dict(self.validated_data)


class ImpositionResultSerializer(serializers.Serializer):
    """Input measurements merged with the calculated result."""

    product_width = serializers.FloatField()
    product_height = serializers.FloatField()
    bleed = serializers.FloatField()
    sheet_width = serializers.FloatField()
    sheet_height = serializers.FloatField()
    valid_width = serializers.FloatField()
    valid_height = serializers.FloatField()
    gutter_h = serializers.FloatField()
    gutter_v = serializers.FloatField()
    repetitions_h = serializers.IntegerField()
    repetitions_v = serializers.IntegerField()
    total_repetitions = serializers.IntegerField()
    utilization = serializers.FloatField()
    orientation = serializers.ChoiceField(choices=Orientation.choices)
    quantity = serializers.IntegerField(required=False)
    sheets_needed = serializers.IntegerField(required=False)
    summary = serializers.ListField(child=serializers.CharField())


class RectSerializer(serializers.Serializer):
    x = serializers.FloatField()
    y = serializers.FloatField()
    width = serializers.FloatField()
    height = serializers.FloatField()


class CellSerializer(serializers.Serializer):
    row = serializers.IntegerField()
    col = serializers.IntegerField()
    footprint = RectSerializer()
    trim = RectSerializer()


class LayoutSchemeSerializer(serializers.Serializer):
    """Sheet, valid area and one cell per copy, in sheet coordinates (mm)."""

    sheet = RectSerializer()
    valid_area = RectSerializer()
    orientation = serializers.ChoiceField(choices=Orientation.choices)
    cells = CellSerializer(many=True)


class SheetSizeSerializer(serializers.Serializer):
    code = serializers.CharField()
    label = serializers.CharField()
    width_mm = serializers.IntegerField()
    height_mm = serializers.IntegerField()
