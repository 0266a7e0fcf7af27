from django.urls import path

from .views import ImpositionCalculateView, ImpositionSchemeView, SheetSizeListView

urlpatterns = [
    path("calculate/", ImpositionCalculateView.as_view(), name="imposition-calculate"),
    path("scheme/", ImpositionSchemeView.as_view(), name="imposition-scheme"),
    path("sheet-sizes/", SheetSizeListView.as_view(), name="imposition-sheet-sizes"),
]
