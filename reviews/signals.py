"""
评价信号处理：评价变动后重新计算医生评分
"""
import logging

from django.db.models import Avg, Count
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from doctors.models import Doctor
from .models import Review

logger = logging.getLogger('review_update_logger')


def refresh_doctor_rating(doctor_id):
    """按该医生全部评价重算平均分和评价数"""
    summary = Review.objects.filter(doctor_id=doctor_id).aggregate(avg=Avg('rating'), total=Count('id'))
    rating = float(summary['avg'] or 0)
    Doctor.objects.filter(pk=doctor_id).update(rating=rating, review_count=summary['total'])
    logger.info('Doctor %s rating refreshed: %.2f from %s reviews', doctor_id, rating, summary['total'])


@receiver(post_save, sender=Review)
def review_saved(sender, instance, **kwargs):
    refresh_doctor_rating(instance.doctor_id)


@receiver(post_delete, sender=Review)
def review_deleted(sender, instance, **kwargs):
    refresh_doctor_rating(instance.doctor_id)
