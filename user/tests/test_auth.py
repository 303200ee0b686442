import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from doctors.models import Doctor
from user.models import User

pytestmark = pytest.mark.django_db


def login(client, email, password='Passw0rd!'):
    return client.post(reverse('login'), {'email': email, 'password': password}, format='json')


def test_register_patient():
    client = APIClient()
    r = client.post(reverse('register'), {
        'email': 'New.Patient@Example.com',
        'password': 'secret123',
        'first_name': 'New',
        'last_name': 'Patient',
    }, format='json')
    assert r.status_code == 201
    assert r.data['success'] is True
    assert r.data['user']['email'] == 'new.patient@example.com'
    assert r.data['user']['role'] == 'patient'
    assert 'password' not in r.data['user']


def test_register_doctor_creates_profile():
    client = APIClient()
    r = client.post(reverse('register'), {
        'email': 'doc@example.com',
        'password': 'secret123',
        'first_name': 'Ravi',
        'last_name': 'Kumar',
        'role': 'doctor',
        'doctor_profile': {
            'specialization': 'Orthodontist',
            'qualification': 'MDS',
            'experience': 8,
            'clinic_name': 'Bright Smiles',
            'city': 'Mumbai',
        },
    }, format='json')
    assert r.status_code == 201
    user = User.objects.get(email='doc@example.com')
    assert user.role == 'doctor'
    doctor = Doctor.objects.get(user=user)
    assert doctor.specialization == 'Orthodontist'
    assert doctor.is_admin_verified is False


def test_register_doctor_requires_profile():
    client = APIClient()
    r = client.post(reverse('register'), {
        'email': 'doc2@example.com', 'password': 'secret123', 'role': 'doctor',
    }, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'Doctor profile is required for doctor registration'}


def test_register_rejects_duplicate_email(patient):
    client = APIClient()
    r = client.post(reverse('register'), {'email': patient.email.upper(), 'password': 'secret123'}, format='json')
    assert r.status_code == 400
    assert r.data['error'] == 'Email is already registered'


def test_login_issues_token_with_role_claim(doctor):
    r = login(APIClient(), doctor.user.email)
    assert r.status_code == 200
    assert r.data['refresh_token']
    assert r.data['expires_in'] > 0
    token = AccessToken(r.data['token'])
    assert token['role'] == 'doctor'
    assert token['user_id'] == doctor.user.id


def test_login_wrong_password_is_401(patient):
    r = login(APIClient(), patient.email, 'wrong-password')
    assert r.status_code == 401
    assert r.data == {'error': 'Invalid email or password'}


def test_login_suspended_account_is_401(make_user):
    user = make_user(is_suspended=True, suspension_reason='Spam reports')
    r = login(APIClient(), user.email)
    assert r.status_code == 401
    assert r.data['error'] == 'Account is suspended. Spam reports'


def test_me_requires_authentication():
    r = APIClient().get(reverse('me'))
    assert r.status_code == 401
    assert r.data == {'error': 'Unauthorized'}


def test_me_returns_and_updates_profile(patient_client, patient):
    r = patient_client.get(reverse('me'))
    assert r.status_code == 200
    assert r.data['user']['email'] == patient.email

    r = patient_client.patch(reverse('me'), {'phone': '9876543210', 'role': 'admin'}, format='json')
    assert r.status_code == 200
    patient.refresh_from_db()
    assert patient.phone == '9876543210'
    assert patient.role == 'patient'


def test_refresh_and_logout(patient):
    client = APIClient()
    tokens = login(client, patient.email).data

    r = client.post(reverse('refresh'), {'refresh': tokens['refresh_token']}, format='json')
    assert r.status_code == 200
    assert AccessToken(r.data['token'])['role'] == 'patient'
    refresh = r.data['refresh_token']

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    r = client.post(reverse('logout'), {'refresh': refresh}, format='json')
    assert r.status_code == 200

    r = APIClient().post(reverse('refresh'), {'refresh': refresh}, format='json')
    assert r.status_code == 401


def test_create_default_admin_is_idempotent():
    call_command('create_default_admin')
    call_command('create_default_admin')
    admins = User.objects.filter(role='admin')
    assert admins.count() == 1
    assert admins.first().is_superuser


def test_admin_lists_patients_only(admin_client, patient, make_user, doctor):
    make_user(role='patient', first_name='Ravi', last_name='Kumar')

    r = admin_client.get(reverse('admin-patient-list'), {'limit': 1})
    assert r.status_code == 200
    pagination = r.data['pagination']
    assert pagination['totalPatients'] == 2
    assert pagination['totalPages'] == 2
    assert pagination['hasNextPage'] is True
    assert pagination['hasPrevPage'] is False
    assert len(r.data['patients']) == 1

    r = admin_client.get(reverse('admin-patient-list'), {'q': 'asha'})
    assert [p['id'] for p in r.data['patients']] == [patient.id]


def test_patient_cannot_list_patients(patient_client):
    r = patient_client.get(reverse('admin-patient-list'))
    assert r.status_code == 403


def test_admin_suspends_and_reinstates_patient(admin_client, patient):
    url = reverse('admin-patient-suspend', args=[patient.id])

    r = admin_client.post(url, {'suspend': True, 'reason': 'Abusive messages'}, format='json')
    assert r.status_code == 200
    assert r.data['patient']['is_suspended'] is True
    patient.refresh_from_db()
    assert patient.suspension_reason == 'Abusive messages'

    r = login(APIClient(), patient.email)
    assert r.status_code == 401
    assert r.data['error'] == 'Account is suspended. Abusive messages'

    r = admin_client.post(url, {'suspend': False}, format='json')
    assert r.status_code == 200
    patient.refresh_from_db()
    assert patient.is_suspended is False
    assert patient.suspension_reason == ''
    assert login(APIClient(), patient.email).status_code == 200


def test_suspend_without_reason_uses_default(admin_client, patient):
    r = admin_client.post(reverse('admin-patient-suspend', args=[patient.id]), {'suspend': True}, format='json')
    assert r.status_code == 200
    patient.refresh_from_db()
    assert patient.suspension_reason == 'No reason provided'


def test_suspend_rejects_non_patient_and_missing_flag(admin_client, doctor, patient):
    r = admin_client.post(reverse('admin-patient-suspend', args=[doctor.user.id]), {'suspend': True}, format='json')
    assert r.status_code == 404
    assert r.data == {'error': 'Patient not found'}

    r = admin_client.post(reverse('admin-patient-suspend', args=[patient.id]), {}, format='json')
    assert r.status_code == 400
