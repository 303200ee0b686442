from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin
)


class UserManager(BaseUserManager):
    """用户管理器"""
    def create_user(self, email, password=None, **extra_fields):
        """创建普通用户"""
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """创建超级管理员"""
        extra_fields.setdefault('role', 'admin')
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """用户模型（患者/医生/管理员共用）"""
    ROLE_CHOICES = [
        ('patient', '患者'),
        ('doctor', '医生'),
        ('admin', '管理员'),
    ]

    email = models.EmailField('邮箱', unique=True)
    first_name = models.CharField('名', max_length=50, blank=True)
    last_name = models.CharField('姓', max_length=50, blank=True)
    phone = models.CharField('手机号', max_length=20, blank=True)
    role = models.CharField('角色', max_length=10, choices=ROLE_CHOICES, default='patient')
    avatar = models.URLField('头像', blank=True, null=True)
    is_suspended = models.BooleanField('是否封禁', default=False)
    suspension_reason = models.CharField('封禁原因', max_length=200, blank=True)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    is_superuser = models.BooleanField(default=False)

    objects = UserManager()
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'user'
        verbose_name = '用户'
        verbose_name_plural = '用户'

    def __str__(self):
        return f'{self.display_name or self.email}({self.role})'

    @property
    def display_name(self):
        return f'{self.first_name or ""} {self.last_name or ""}'.strip()
