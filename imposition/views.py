"""
Imposition API views.
POST /api/imposition/calculate/: copies per sheet, orientation, utilization.
POST /api/imposition/scheme/: copy positions for a preview drawing.
GET /api/imposition/sheet-sizes/: standard sheet presets (public).
"""
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .choices import SHEET_SIZE_DIMENSIONS
from .engine import calculate, sheets_needed
from .scheme import build_scheme
from .serializers import (
    ImpositionRequestSerializer,
    ImpositionResultSerializer,
    LayoutSchemeSerializer,
    SheetSizeSerializer,
)
from .summary import describe


def _validated_request(request) -> ImpositionRequestSerializer:
    serializer = ImpositionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer


class ImpositionCalculateView(APIView):
    """Calculate the imposition of one product on one sheet."""

    permission_classes = [IsAuthenticated]

    @extend_schema(request=ImpositionRequestSerializer, responses=ImpositionResultSerializer)
    def post(self, request):
        serializer = _validated_request(request)
        data = serializer.to_input()
        result = calculate(data)

        payload = {**data.as_dict(), **result.as_dict(), "summary": describe(data, result)}
        quantity = serializer.validated_data.get("quantity")
        if quantity:
            payload["quantity"] = quantity
            payload["sheets_needed"] = sheets_needed(quantity, result.total_repetitions)
        return Response(ImpositionResultSerializer(payload).data)


class ImpositionSchemeView(APIView):
    """Layout of every copy on the sheet for the calculated imposition."""

    permission_classes = [IsAuthenticated]

    @extend_schema(request=ImpositionRequestSerializer, responses=LayoutSchemeSerializer)
    def post(self, request):
        serializer = _validated_request(request)
        scheme = build_scheme(serializer.to_input())
        return Response(LayoutSchemeSerializer(scheme.as_dict()).data)


class SheetSizeListView(APIView):
    """Standard sheet sizes for filling in sheet dimensions."""

    permission_classes = [AllowAny]

    @extend_schema(responses=SheetSizeSerializer(many=True))
    def get(self, request):
        sizes = [
            {"code": size.value, "label": size.label, "width_mm": w, "height_mm": h}
            for size, (w, h) in SHEET_SIZE_DIMENSIONS.items()
        ]
        return Response(SheetSizeSerializer(sizes, many=True).data)
