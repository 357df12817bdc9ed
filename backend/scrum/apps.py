from django.apps import AppConfig


class ScrumConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'scrum'
    verbose_name = 'Scrum: sprints, backlog and tasks'

    def ready(self):
        from . import receivers  # noqa: F401
