from django.apps import AppConfig


class RsvpizzaConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rsvpizza'
    verbose_name = 'RSV Pizza'
