from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

import doctors.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Doctor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('specialization', models.CharField(max_length=100, verbose_name='专科')),
                ('qualification', models.CharField(max_length=100, verbose_name='学历资质')),
                ('experience', models.PositiveIntegerField(default=0, verbose_name='从业年限')),
                ('clinic_name', models.CharField(max_length=150, verbose_name='诊所名称')),
                ('clinic_address', models.CharField(blank=True, max_length=255, verbose_name='诊所地址')),
                ('city', models.CharField(blank=True, max_length=80, verbose_name='城市')),
                ('consultation_fee', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='诊费')),
                ('about', models.TextField(blank=True, verbose_name='简介')),
                ('weekly_availability', models.JSONField(blank=True, default=doctors.models.default_weekly_availability, verbose_name='每周出诊时间')),
                ('rating', models.FloatField(default=0.0, verbose_name='评分')),
                ('review_count', models.IntegerField(default=0, verbose_name='评价数量')),
                ('is_admin_verified', models.BooleanField(default=False, verbose_name='是否已审核')),
                ('verified_at', models.DateTimeField(blank=True, null=True, verbose_name='审核时间')),
                ('is_suspended', models.BooleanField(default=False, verbose_name='是否封禁')),
                ('suspension_reason', models.CharField(blank=True, max_length=200, verbose_name='封禁原因')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='doctor_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': '医生',
                'verbose_name_plural': '医生',
                'db_table': 'doctor',
                'ordering': ['-rating', '-review_count'],
            },
        ),
    ]
