from django.apps import AppConfig


class UserConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'user'
    verbose_name = '用户管理'

    def ready(self):
        """应用启动时注册signals"""
        import user.signals  # noqa: F401
