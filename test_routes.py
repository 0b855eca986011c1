from datetime import datetime, timedelta

from app import create_app
from models import Admin, FeeStructure, Grade, ParentMeeting, SystemSetting, UserRoles, db
from scripts.seed_defaults import seed
from utils.settings import SystemSettings


def test_index_reports_configuration(client):
    body = client.get('/').get_json()
    assert body['configured'] is True
    assert body['message'] == 'Ready'


def test_unconfigured_app_still_answers(monkeypatch):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    monkeypatch.delenv('SQLALCHEMY_DATABASE_URI', raising=False)
    app = create_app({'TESTING': True})
    client = app.test_client()

    assert client.get('/').get_json()['configured'] is False
    assert client.get('/db-test').status_code == 503
    assert client.get('/list/exams').status_code == 404


def test_db_test_route(client):
    body = client.get('/db-test').get_json()
    assert body == {'db': 'connected', 'test_result': 1}


def test_me_and_logout(login):
    client = login('teacher-1', UserRoles.TEACHER)
    assert client.get('/me').get_json() == {'success': True, 'user_id': 'teacher-1', 'role': 'teacher'}

    assert client.post('/logout').get_json()['success'] is True
    assert client.get('/me').status_code == 401


def test_unknown_role_is_not_signed_in(login):
    client = login('someone', 'janitor')
    assert client.get('/me').status_code == 401


def test_admin_dashboard_counts(login, school):
    db.session.add(Admin(id='admin-1', username='admin', name='Ada', surname='Admin'))
    db.session.commit()
    client = login('admin-1', UserRoles.ADMIN)

    body = client.get('/dashboard').get_json()
    assert body['role'] == 'admin'
    assert body['counts'] == {'admins': 1, 'teachers': 2, 'students': 2, 'parents': 2}


def test_teacher_dashboard_lists_own_lessons_and_events(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    body = client.get('/dashboard').get_json()
    assert [lesson['name'] for lesson in body['lessons']] == ['Algebra']
    assert [event['title'] for event in body['events']] == ['Sports Day', '1A Museum Trip']
    assert all(event['starts'] != 'N/A' for event in body['events'])


def test_parent_dashboard_shows_next_meetings(login, school):
    now = datetime.utcnow()
    db.session.add(ParentMeeting(title='Last term review', meeting_date=now - timedelta(days=30),
                                 parent_id='parent-1', teacher_id='teacher-1'))
    for day in range(1, 8):
        db.session.add(ParentMeeting(title=f'Check-in {day}', meeting_date=now + timedelta(days=day),
                                     parent_id='parent-1', teacher_id='teacher-1'))
    db.session.commit()

    client = login('parent-1', UserRoles.PARENT)
    body = client.get('/dashboard').get_json()
    assert [child['id'] for child in body['children']] == ['student-1']
    assert [meeting['title'] for meeting in body['meetings']] == [f'Check-in {day}' for day in range(1, 6)]


def test_dashboard_without_profile_row(login, school):
    client = login('student-99', UserRoles.STUDENT)
    assert client.get('/dashboard').status_code == 404


def test_system_settings_are_admin_only(login, app):
    client = login('teacher-1', UserRoles.TEACHER)
    assert client.get('/admin/system_settings').status_code == 403


def test_system_settings_defaults_and_update(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/admin/system_settings').get_json()
    assert body['settings'] == {'school_name': '', 'currency': 'USD', 'timezone': 'UTC'}

    body = client.post('/admin/system_settings', json={
        'school_name': 'Hillside Academy', 'currency': 'kes', 'timezone': 'Africa/Nairobi',
    }).get_json()
    assert body['settings'] == {
        'school_name': 'Hillside Academy', 'currency': 'KES', 'timezone': 'Africa/Nairobi',
    }
    assert SystemSetting.query.count() == 3


def test_system_settings_reject_unknown_timezone(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/admin/system_settings', json={'timezone': 'Mars/Olympus'})
    assert response.status_code == 400
    assert SystemSetting.query.count() == 0


def test_amounts_are_displayed_in_school_currency(login, app):
    db.session.add(FeeStructure(name='Tuition', amount=1500, fee_type='TUITION'))
    db.session.commit()
    SystemSettings.set('general', 'currency', 'GBP')

    client = login('admin-1', UserRoles.ADMIN)
    row = client.get('/list/fee-structures').get_json()['data'][0]
    assert row['amount_display'] == '£ 1,500.00'


def test_format_datetime_uses_school_timezone(app):
    SystemSettings.set('general', 'timezone', 'Africa/Nairobi')
    assert SystemSettings.format_datetime(datetime(2025, 1, 1, 9, 0)) == 'Jan 01, 2025 12:00 PM'
    assert SystemSettings.format_datetime(None) == 'N/A'


def test_seed_is_idempotent(app):
    first = seed(app)
    assert first['grades'] == list(range(1, 13))
    assert first['settings'] == ['school_name', 'currency', 'timezone']

    second = seed(app)
    assert not any(second.values())
    assert Grade.query.count() == 12


def test_configured_app_serves_relationship_filters(monkeypatch):
    monkeypatch.setenv('DATABASE_URL', 'sqlite://')
    fresh = create_app({'TESTING': True, 'WTF_CSRF_ENABLED': False, 'SQLALCHEMY_ENGINE_OPTIONS': {}})
    assert 'lists.list_entity' in fresh.view_functions

    with fresh.app_context():
        db.create_all()
        client = fresh.test_client()
        with client.session_transaction() as sess:
            sess['user_id'] = 'admin-1'
            sess['user_role'] = UserRoles.ADMIN

        body = client.get('/list/teachers?classId=1').get_json()
        assert body['success'] is True
        assert body['count'] == 0
        assert client.get('/list/parents?search=anyone').status_code == 200
        db.session.remove()
        db.drop_all()


def test_local_packages_are_regular_packages():
    import os

    import app as app_module
    import routes
    import utils

    root = os.path.dirname(os.path.abspath(app_module.__file__))
    for package in (routes, utils):
        assert package.__file__ is not None
        assert os.path.dirname(os.path.abspath(package.__file__)).startswith(root)
