from django.apps import AppConfig


class TimetrackingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'timetracking'
    verbose_name = 'Time tracking'

    def ready(self):
        from . import receivers  # noqa: F401
