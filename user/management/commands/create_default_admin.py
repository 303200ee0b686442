from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from decouple import config


class Command(BaseCommand):
    help = 'Create a single default admin if none exists (idempotent).'

    def handle(self, *args, **options):
        User = get_user_model()
        if User.objects.filter(role='admin').exists():
            self.stdout.write(self.style.WARNING('Admin already exists. No action taken.'))
            return
        # 从 .env 读取，提供默认值以避免缺失
        email = config('ADMIN_EMAIL', default='admin@doctar.local')
        password = config('ADMIN_PASSWORD', default='admin@123')
        first_name = config('ADMIN_FIRST_NAME', default='System')
        last_name = config('ADMIN_LAST_NAME', default='Admin')
        user = User.objects.create_superuser(email=email, password=password,
                                             first_name=first_name, last_name=last_name)
        self.stdout.write(self.style.SUCCESS(f'Created admin: {user.email}'))
