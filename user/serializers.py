from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken, TokenError


class UserSerializer(serializers.ModelSerializer):
    """用户序列化器"""
    password = serializers.CharField(
        write_only=True,
        max_length=100,
        required=False,  # 更新资料时不强制要求密码
        min_length=6,
        help_text='密码（至少6位）'
    )
    avatar = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text='头像URL'
    )
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'first_name', 'last_name', 'display_name', 'phone', 'role', 'avatar',
                  'is_suspended', 'suspension_reason', 'created_at', 'updated_at', 'password']
        read_only_fields = ['id', 'email', 'role', 'is_suspended', 'suspension_reason', 'created_at', 'updated_at']

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save()
        return user


class DoctorProfileInputSerializer(serializers.Serializer):
    """医生注册时附带的执业信息"""
    specialization = serializers.CharField(max_length=100)
    qualification = serializers.CharField(max_length=100)
    experience = serializers.IntegerField(min_value=0)
    clinic_name = serializers.CharField(max_length=150)
    clinic_address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=80, required=False, allow_blank=True)
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)


class RegisterSerializer(serializers.ModelSerializer):
    """注册序列化器：患者直接创建账号，医生同时创建执业档案"""
    password = serializers.CharField(write_only=True, min_length=6, max_length=100)
    role = serializers.ChoiceField(choices=['patient', 'doctor'], default='patient')
    doctor_profile = DoctorProfileInputSerializer(required=False, write_only=True)

    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'password', 'first_name', 'last_name', 'phone', 'role', 'doctor_profile']
        read_only_fields = ['id']

    def validate_email(self, value):
        value = value.strip().lower()
        if get_user_model().objects.filter(email=value).exists():
            raise serializers.ValidationError('Email is already registered')
        return value

    def validate(self, attrs):
        if attrs.get('role') == 'doctor' and not attrs.get('doctor_profile'):
            raise serializers.ValidationError({'doctor_profile': 'Doctor profile is required for doctor registration'})
        return attrs

    def create(self, validated_data):
        from doctors.models import Doctor

        profile = validated_data.pop('doctor_profile', None)
        password = validated_data.pop('password')
        email = validated_data.pop('email')
        try:
            with transaction.atomic():
                user = get_user_model().objects.create_user(email=email, password=password, **validated_data)
                if user.role == 'doctor':
                    Doctor.objects.create(user=user, **profile)
        except IntegrityError:
            # 并发注册时仍可能违反唯一约束
            raise serializers.ValidationError({'email': 'Email is already registered'})
        return user


class UserLoginSerializer(serializers.Serializer):
    """用户登录序列化器"""
    email = serializers.EmailField(required=True, help_text='邮箱')
    password = serializers.CharField(required=True, write_only=True, help_text='密码')

    def validate(self, attrs):
        email = attrs['email'].strip().lower()
        user = get_user_model().objects.filter(email=email).first()
        if not user or not user.check_password(attrs['password']):
            raise serializers.ValidationError('Invalid email or password')
        if not user.is_active:
            raise serializers.ValidationError('Account is deactivated. Please contact support.')
        if user.is_suspended:
            reason = user.suspension_reason or 'Please contact support.'
            raise serializers.ValidationError(f'Account is suspended. {reason}')
        attrs['user'] = user
        return attrs


class UserLogOutSerializer(serializers.Serializer):
    "A serializer for validate data for Logging out user"
    refresh = serializers.CharField(required=True,
                                    write_only=True, trim_whitespace=True)

    def validate_refresh(self, value):
        """Validate the refresh token"""
        access_token = self.context.get('access_token')

        if not access_token:
            raise serializers.ValidationError("Something wrong in the access token")

        access_user_id = access_token.payload.get('user_id')
        if access_user_id is None:
            raise serializers.ValidationError("User ID is missing in the access token.")

        try:
            refresh_token = RefreshToken(value)
            refresh_user_id = refresh_token.payload.get('user_id')
        except TokenError:
            raise serializers.ValidationError(
                "Invalid or expired refresh token.")

        # Check if the user ID in the access token matches the refresh token
        if access_user_id != refresh_user_id:
            raise serializers.ValidationError(
                "The refresh token does not belong " +
                "to the same user as the access token.")

        return value


class UserSuspendSerializer(serializers.Serializer):
    """管理员封禁/解封患者"""
    suspend = serializers.BooleanField(required=True)
    reason = serializers.CharField(required=False, allow_blank=True, max_length=200)
