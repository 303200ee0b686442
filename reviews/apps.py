from django.apps import AppConfig


class ReviewsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'reviews'
    verbose_name = '评价管理'

    def ready(self):
        import reviews.signals  # noqa: F401
