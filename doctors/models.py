"""
医生模型
"""
from django.db import models
from user.models import User


def default_weekly_availability():
    return {}


class Doctor(models.Model):
    """医生执业档案"""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='doctor_profile')
    specialization = models.CharField('专科', max_length=100)
    qualification = models.CharField('学历资质', max_length=100)
    experience = models.PositiveIntegerField('从业年限', default=0)
    clinic_name = models.CharField('诊所名称', max_length=150)
    clinic_address = models.CharField('诊所地址', max_length=255, blank=True)
    city = models.CharField('城市', max_length=80, blank=True)
    consultation_fee = models.DecimalField('诊费', max_digits=10, decimal_places=2, null=True, blank=True)
    about = models.TextField('简介', blank=True)
    # {"monday": {"available": true, "timeSlots": [{"startTime": "9:00 AM", "endTime": "1:00 PM"}]}, ...}
    weekly_availability = models.JSONField('每周出诊时间', default=default_weekly_availability, blank=True)
    rating = models.FloatField('评分', default=0.0)
    review_count = models.IntegerField('评价数量', default=0)
    # 审核 / 封禁
    is_admin_verified = models.BooleanField('是否已审核', default=False)
    verified_at = models.DateTimeField('审核时间', blank=True, null=True)
    is_suspended = models.BooleanField('是否封禁', default=False)
    suspension_reason = models.CharField('封禁原因', max_length=200, blank=True)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    class Meta:
        db_table = 'doctor'
        verbose_name = '医生'
        verbose_name_plural = '医生'
        ordering = ['-rating', '-review_count']

    def __str__(self):
        return f'{self.full_name} - {self.clinic_name}'

    @property
    def full_name(self):
        return self.user.display_name or self.user.email
