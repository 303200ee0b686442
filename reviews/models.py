"""
评价模型
"""
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from user.models import User
from doctors.models import Doctor


class Review(models.Model):
    """患者对医生的评价"""
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='reviews')
    # 匿名评价时为空
    patient = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviews')
    rating = models.PositiveSmallIntegerField('评分', validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField('评价内容', max_length=1000)
    patient_name = models.CharField('患者姓名', max_length=100)
    email = models.EmailField('邮箱', blank=True)
    doctor_response = models.CharField('医生回复', max_length=500, blank=True)
    response_date = models.DateTimeField('回复时间', blank=True, null=True)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    class Meta:
        db_table = 'review'
        verbose_name = '评价'
        verbose_name_plural = '评价'
        ordering = ['-created_at']
        constraints = [
            # 每位患者对同一医生只能评价一次（匿名评价 patient 为空不受限）
            models.UniqueConstraint(fields=['doctor', 'patient'], name='review_doctor_patient_uniq'),
        ]
        indexes = [
            models.Index(fields=['doctor', 'created_at'], name='review_doctor__9a2f57_idx'),
        ]

    def __str__(self):
        return f'{self.patient_name} -> {self.doctor_id}: {self.rating}'
