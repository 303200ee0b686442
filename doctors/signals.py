"""
医生信号处理
"""
import logging

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from .models import Doctor

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Doctor)
def sync_doctor_to_user(sender, instance, created, **kwargs):
    """
    当Doctor模型保存时，确保对应用户角色为医生
    """
    user = instance.user
    if user.role != 'doctor':
        user.role = 'doctor'
        user.save(update_fields=['role', 'updated_at'])
        logger.info('User %s promoted to doctor role', user.pk)


@receiver(post_delete, sender=Doctor)
def handle_doctor_delete(sender, instance, **kwargs):
    """
    当Doctor被删除时，重置User的role为患者
    """
    from user.models import User

    User.objects.filter(pk=instance.user_id, role='doctor').update(role='patient')
