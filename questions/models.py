"""
健康咨询问题模型
"""
from django.db import models
from user.models import User


class Question(models.Model):
    """患者向专科提问，由管理员回复"""
    STATUS_CHOICES = [
        ('open', '待回复'),
        ('answered', '已回复'),
        ('closed', '已关闭'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='questions')
    name = models.CharField('姓名', max_length=100)
    email = models.EmailField('邮箱')
    specialist = models.CharField('专科', max_length=100)
    question = models.TextField('问题', max_length=2000)
    status = models.CharField('状态', max_length=10, choices=STATUS_CHOICES, default='open', db_index=True)
    reply = models.TextField('回复', blank=True)
    replied_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='replied_questions')
    replied_at = models.DateTimeField('回复时间', blank=True, null=True)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    class Meta:
        db_table = 'question'
        verbose_name = '咨询问题'
        verbose_name_plural = '咨询问题'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.name} - {self.specialist}'
