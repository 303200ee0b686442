"""
评价视图
"""
import logging

from django.db import IntegrityError, transaction
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from doctors.models import Doctor
from utils.permissions import request_role
from utils.response import success_response, error_response
from .models import Review
from .serializers import ReviewCreateSerializer, ReviewSerializer

logger = logging.getLogger(__name__)

ALREADY_REVIEWED = 'You have already reviewed this doctor'


class ReviewView(APIView):
    """POST 患者提交评价；GET 按医生查询全部评价"""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    def post(self, request):
        if request_role(request) != 'patient':
            return error_response('Only patients can submit reviews', 403)

        patient = request.user
        if not patient.is_active:
            return error_response('Patient not found or inactive', 404)

        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        doctor = Doctor.objects.filter(pk=data['doctorId']).first()
        if doctor is None:
            return error_response('Doctor not found', 404)

        if Review.objects.filter(doctor=doctor, patient=patient).exists():
            return error_response(ALREADY_REVIEWED, 400)

        # 并发提交时由唯一约束拦截
        try:
            with transaction.atomic():
                review = Review.objects.create(
                    doctor=doctor,
                    patient=patient,
                    rating=data['rating'],
                    comment=data['comment'].strip(),
                    patient_name=f'{patient.first_name} {patient.last_name}'.strip() or 'Patient',
                    email=patient.email,
                )
        except IntegrityError:
            return error_response(ALREADY_REVIEWED, 400)
        logger.info('Review %s submitted by patient %s for doctor %s', review.id, patient.id, doctor.id)
        return success_response({'review': ReviewSerializer(review).data}, 'Review submitted successfully', 201)

    def get(self, request):
        doctor_id = request.query_params.get('doctorId')
        if not doctor_id:
            return error_response('Doctor ID is required', 400)
        if not doctor_id.isdigit():
            return error_response('Doctor not found', 404)
        reviews = Review.objects.filter(doctor_id=doctor_id).order_by('-created_at', '-id')
        return success_response({'reviews': ReviewSerializer(reviews, many=True).data})
