from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('doctors', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='预约日期')),
                ('slot_start', models.DateTimeField(verbose_name='开始时间')),
                ('slot_end', models.DateTimeField(verbose_name='结束时间')),
                ('booking_type', models.CharField(choices=[('walk-in', '到店'), ('video', '视频问诊'), ('clinic', '诊所'), ('home-visit', '上门'), ('other', '其他')], default='walk-in', max_length=20, verbose_name='预约方式')),
                ('visit_type', models.CharField(choices=[('first-time', '初诊'), ('follow-up', '复诊')], max_length=20, verbose_name='就诊类型')),
                ('status', models.CharField(choices=[('pending', '待确认'), ('booked', '已预约'), ('cancelled', '已取消'), ('completed', '已完成'), ('rejected', '已拒绝')], default='pending', max_length=20, verbose_name='状态')),
                ('notes', models.TextField(blank=True, verbose_name='备注')),
                ('booking_for', models.CharField(choices=[('myself', '本人'), ('someone-else', '他人')], default='myself', max_length=20, verbose_name='就诊人')),
                ('guest_patient', models.JSONField(blank=True, null=True, verbose_name='他人信息')),
                ('notify_email', models.EmailField(blank=True, max_length=254, verbose_name='通知邮箱')),
                ('home_visit_address', models.JSONField(blank=True, null=True, verbose_name='上门地址')),
                ('created_by', models.CharField(choices=[('patient', '患者'), ('doctor', '医生'), ('admin', '管理员')], default='patient', max_length=10, verbose_name='创建方')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to='doctors.doctor')),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': '预约',
                'verbose_name_plural': '预约',
                'db_table': 'booking',
                'ordering': ['slot_start'],
                'indexes': [
                    models.Index(fields=['doctor', 'status', 'slot_start'], name='booking_doctor__6f1c2e_idx'),
                    models.Index(fields=['patient', 'slot_start'], name='booking_patient_3b8d41_idx'),
                ],
                'unique_together': {('doctor', 'slot_start')},
            },
        ),
    ]
