from django.apps import AppConfig


class AccommodationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.accommodations"
    verbose_name = "Accommodations"

    def ready(self) -> None:
        from .application.bootstrap import register_handlers

        register_handlers()
