"""
测试环境配置：内存SQLite + 统计查询串行执行（与测试事务共用同一连接）
"""
from .settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STATS_QUERY_WORKERS = 1
STATS_QUERY_TIMEOUT = 5.0

TIME_ZONE = 'Asia/Kolkata'
