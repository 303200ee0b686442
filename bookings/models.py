"""
预约模型
"""
from django.db import models
from django.db.models import Q
from user.models import User
from doctors.models import Doctor


class Booking(models.Model):
    """预约模型：患者提交为 pending，医生接受后为 booked"""
    STATUS_CHOICES = [
        ('pending', '待确认'),
        ('booked', '已预约'),
        ('cancelled', '已取消'),
        ('completed', '已完成'),
        ('rejected', '已拒绝'),
    ]
    BOOKING_TYPE_CHOICES = [
        ('walk-in', '到店'),
        ('video', '视频问诊'),
        ('clinic', '诊所'),
        ('home-visit', '上门'),
        ('other', '其他'),
    ]
    VISIT_TYPE_CHOICES = [
        ('first-time', '初诊'),
        ('follow-up', '复诊'),
    ]
    BOOKING_FOR_CHOICES = [
        ('myself', '本人'),
        ('someone-else', '他人'),
    ]
    CREATED_BY_CHOICES = [
        ('patient', '患者'),
        ('doctor', '医生'),
        ('admin', '管理员'),
    ]
    # 占用医生时段的状态
    ACTIVE_STATUSES = ('pending', 'booked')

    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='bookings')
    patient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='bookings')
    date = models.DateField('预约日期')
    slot_start = models.DateTimeField('开始时间')
    slot_end = models.DateTimeField('结束时间')
    booking_type = models.CharField('预约方式', max_length=20, choices=BOOKING_TYPE_CHOICES, default='walk-in')
    visit_type = models.CharField('就诊类型', max_length=20, choices=VISIT_TYPE_CHOICES)
    status = models.CharField('状态', max_length=20, choices=STATUS_CHOICES, default='pending')
    notes = models.TextField('备注', blank=True)
    booking_for = models.CharField('就诊人', max_length=20, choices=BOOKING_FOR_CHOICES, default='myself')
    # {name, email, phone, gender, dob, address, postalCode, city}
    guest_patient = models.JSONField('他人信息', blank=True, null=True)
    notify_email = models.EmailField('通知邮箱', blank=True)
    # {line1, line2, city, postalCode, landmark, fullText}
    home_visit_address = models.JSONField('上门地址', blank=True, null=True)
    created_by = models.CharField('创建方', max_length=10, choices=CREATED_BY_CHOICES, default='patient')
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    class Meta:
        db_table = 'booking'
        verbose_name = '预约'
        verbose_name_plural = '预约'
        ordering = ['slot_start']
        constraints = [
            # 取消、拒绝的预约不再占用时段
            models.UniqueConstraint(
                fields=['doctor', 'slot_start'],
                condition=Q(status__in=['pending', 'booked']),
                name='booking_active_slot_uniq',
            ),
        ]
        indexes = [
            models.Index(fields=['doctor', 'status', 'slot_start'], name='booking_doctor__6f1c2e_idx'),
            models.Index(fields=['patient', 'slot_start'], name='booking_patient_3b8d41_idx'),
        ]

    def __str__(self):
        return f'{self.patient.email} - {self.doctor_id} - {self.slot_start:%Y-%m-%d %H:%M}'

    @property
    def patient_display_name(self):
        if self.booking_for == 'someone-else' and self.guest_patient:
            return self.guest_patient.get('name') or 'Guest'
        return self.patient.display_name or 'Patient'
