"""Choice enums for imposition app."""

from django.db import models


class Orientation(models.TextChoices):
    HORIZONTAL = "horizontal", "Horizontal"
    VERTICAL = "vertical", "Vertical"


class SheetSize(models.TextChoices):
    A4 = "A4", "A4"
    A3 = "A3", "A3"
    SRA3 = "SRA3", "SRA3"
    A2 = "A2", "A2"
    A1 = "A1", "A1"
    A0 = "A0", "A0"
    PRESS_50X35 = "50x35", "50 × 35 cm"
    PRESS_70X50 = "70x50", "70 × 50 cm"
    PRESS_100X70 = "100x70", "100 × 70 cm"


# Standard dimensions in mm (width, height) for auto-fill
SHEET_SIZE_DIMENSIONS = {
    SheetSize.A4: (210, 297),
    SheetSize.A3: (297, 420),
    SheetSize.SRA3: (320, 450),
    SheetSize.A2: (420, 594),
    SheetSize.A1: (594, 841),
    SheetSize.A0: (841, 1189),
    SheetSize.PRESS_50X35: (500, 350),
    SheetSize.PRESS_70X50: (700, 500),
    SheetSize.PRESS_100X70: (1000, 700),
}
