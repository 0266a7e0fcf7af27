"""Tests for the imposition HTTP API."""
from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()

CARD_ON_PRESS_SHEET = {
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


class ImpositionCalculateAPITest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user("prepress", "p@t.com", "pass")
        self.client.force_authenticate(user=self.user)

    def test_calculate(self):
        resp = self.client.post("/api/imposition/calculate/", CARD_ON_PRESS_SHEET, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertEqual(data["repetitions_h"], 5)
        self.assertEqual(data["repetitions_v"], 6)
        self.assertEqual(data["total_repetitions"], 30)
        self.assertEqual(data["orientation"], "horizontal")
        self.assertEqual(data["utilization"], 87.0)
        # Input echoed back with the result
        self.assertEqual(data["sheet_width"], 520)
        self.assertIn("5 × 6 = 30 per sheet", data["summary"])
        self.assertNotIn("sheets_needed", data)

    def test_quantity_adds_sheets_needed(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {**CARD_ON_PRESS_SHEET, "quantity": 100},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["quantity"], 100)
        self.assertEqual(resp.json()["sheets_needed"], 4)

    def test_sheet_size_preset_and_defaults(self):
        """50×35 preset; valid area = sheet, bleed 3mm and no gutters by default."""
        resp = self.client.post(
            "/api/imposition/calculate/",
            {"product_width": 90, "product_height": 50, "sheet_size": "50x35"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertEqual(data["valid_width"], 500)
        self.assertEqual(data["valid_height"], 350)
        self.assertEqual(data["bleed"], 3)
        self.assertEqual(data["gutter_h"], 0)
        self.assertEqual(data["total_repetitions"], 30)
        # 30 × 96 × 56 / (500 × 350)
        self.assertEqual(data["utilization"], 92.2)

    def test_explicit_sheet_dimensions_override_preset(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {"product_width": 90, "product_height": 50, "sheet_size": "50x35", "sheet_width": 700},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["sheet_width"], 700)
        self.assertEqual(resp.json()["sheet_height"], 350)

    def test_degenerate_gutter_is_not_an_error(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {**CARD_ON_PRESS_SHEET, "gutter_h": -100},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["repetitions_h"], 0)
        self.assertEqual(resp.json()["total_repetitions"], 0)

    def test_extreme_ratio_is_not_an_error(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {
                "product_width": 1e-10,
                "product_height": 1e-10,
                "bleed": 0,
                "sheet_width": 1e300,
                "sheet_height": 1e300,
                "gutter_h": 0,
                "gutter_v": 0,
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["total_repetitions"], 0)
        self.assertEqual(resp.json()["utilization"], 0.0)

    def test_missing_sheet_dimensions(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {"product_width": 90, "product_height": 50},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("sheet_width", resp.json())
        self.assertIn("sheet_height", resp.json())

    def test_unknown_sheet_size(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {"product_width": 90, "product_height": 50, "sheet_size": "B2"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("sheet_size", resp.json())

    def test_non_numeric_measurement(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {**CARD_ON_PRESS_SHEET, "product_width": "wide"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("product_width", resp.json())

    def test_quantity_must_be_positive(self):
        resp = self.client.post(
            "/api/imposition/calculate/",
            {**CARD_ON_PRESS_SHEET, "quantity": 0},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("quantity", resp.json())

    def test_anonymous_rejected(self):
        resp = APIClient().post("/api/imposition/calculate/", CARD_ON_PRESS_SHEET, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class ImpositionSchemeAPITest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user("prepress", "p@t.com", "pass")
        self.client.force_authenticate(user=self.user)

    def test_scheme(self):
        resp = self.client.post("/api/imposition/scheme/", CARD_ON_PRESS_SHEET, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertEqual(data["orientation"], "horizontal")
        self.assertEqual(data["valid_area"], {"x": 10, "y": 10, "width": 500, "height": 350})
        self.assertEqual(len(data["cells"]), 30)
        self.assertEqual(data["cells"][0]["footprint"], {"x": 19, "y": 15.5, "width": 94, "height": 54})

    def test_scheme_validation(self):
        resp = self.client.post("/api/imposition/scheme/", {"product_width": 90}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("product_height", resp.json())


class PublicEndpointsTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_sheet_sizes(self):
        resp = self.client.get("/api/imposition/sheet-sizes/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        sizes = {s["code"]: s for s in resp.json()}
        self.assertEqual(sizes["SRA3"]["width_mm"], 320)
        self.assertEqual(sizes["SRA3"]["height_mm"], 450)
        self.assertEqual(sizes["70x50"]["label"], "70 × 50 cm")

    def test_health(self):
        resp = self.client.get("/api/health/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json(), {"status": "ok"})


class TokenAuthFlowTest(TestCase):
    """Obtain a JWT and call the calculator with it."""

    def setUp(self):
        self.client = APIClient()
        User.objects.create_user("prepress", "p@t.com", "pass")

    def test_token_then_calculate(self):
        resp = self.client.post(
            "/api/auth/token/",
            {"username": "prepress", "password": "pass"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        access = resp.json()["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        resp = self.client.post("/api/imposition/calculate/", CARD_ON_PRESS_SHEET, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["total_repetitions"], 30)


class JWTOnlySettingsTest(SimpleTestCase):
    """The API is bearer-token only; no session or CSRF machinery is installed."""

    def test_no_session_or_csrf(self):
        self.assertNotIn("django.contrib.sessions", settings.INSTALLED_APPS)
        self.assertNotIn("django.contrib.sessions.middleware.SessionMiddleware", settings.MIDDLEWARE)
        self.assertNotIn("django.middleware.csrf.CsrfViewMiddleware", settings.MIDDLEWARE)

    def test_post_without_csrf_token(self):
        client = APIClient(enforce_csrf_checks=True)
        client.force_authenticate(user=User(username="prepress"))
        resp = client.post("/api/imposition/calculate/", CARD_ON_PRESS_SHEET, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
