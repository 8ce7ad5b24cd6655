from django.apps import AppConfig


class PointsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.points'
    verbose_name = 'Loyalty Points'

    def ready(self):
        import apps.points.signals  # noqa: F401
