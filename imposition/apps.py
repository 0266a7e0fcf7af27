from django.apps import AppConfig


class ImpositionConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "imposition"
    verbose_name = "Imposition"
