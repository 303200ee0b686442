import pytest
from rest_framework.test import APIClient

from doctors.models import Doctor
from user.models import User
from user.tokens import RoleRefreshToken

WEEKDAY_NAMES = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']


def full_week(start='9:00 AM', end='5:00 PM'):
    return {day: {'available': True, 'timeSlots': [{'startTime': start, 'endTime': end}]}
            for day in WEEKDAY_NAMES}


def bearer(client, user):
    """给客户端附加带 role 声明的访问令牌"""
    refresh = RoleRefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def _make(role='patient', **extra):
        counter['n'] += 1
        extra.setdefault('email', f'{role}{counter["n"]}@example.com')
        extra.setdefault('first_name', role.title())
        extra.setdefault('last_name', str(counter['n']))
        return User.objects.create_user(password='Passw0rd!', role=role, **extra)

    return _make


@pytest.fixture
def make_doctor(make_user):
    def _make(verified=True, weekly_availability=None, **extra):
        user = make_user(role='doctor', **extra)
        return Doctor.objects.create(
            user=user,
            specialization='Dentist',
            qualification='BDS',
            experience=5,
            clinic_name='Smile Clinic',
            city='Pune',
            is_admin_verified=verified,
            weekly_availability=full_week() if weekly_availability is None else weekly_availability,
        )

    return _make


@pytest.fixture
def patient(make_user):
    return make_user(role='patient', first_name='Asha', last_name='Rao')


@pytest.fixture
def doctor(make_doctor):
    return make_doctor()


@pytest.fixture
def admin_user(make_user):
    return make_user(role='admin', is_staff=True)


@pytest.fixture
def patient_client(patient):
    return bearer(APIClient(), patient)


@pytest.fixture
def doctor_client(doctor):
    return bearer(APIClient(), doctor.user)


@pytest.fixture
def admin_client(admin_user):
    return bearer(APIClient(), admin_user)


@pytest.fixture
def auth_client():
    def _client(user):
        return bearer(APIClient(), user)

    return _client


@pytest.fixture
def week_schedule():
    return full_week
