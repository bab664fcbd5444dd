from django.apps import AppConfig


class CookbookConfig(AppConfig):
    """Django app config for the cookbook core."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cookbook'
