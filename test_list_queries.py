from datetime import datetime, timedelta

from models import Expense, UserRoles, db
from entities import get_entity
from utils.cache import get_list_cache
from utils.context import RequestContext
from utils.list_query import parse_page, run_list_query


def titles(response):
    return [row['title'] for row in response.get_json()['data']]


def add_expenses(count, title='Chalk', category='Supplies', amount=10.0):
    start = datetime(2025, 1, 1)
    db.session.add_all([
        Expense(title=f"{title} {i}", amount=amount, date=start + timedelta(days=i), category=category)
        for i in range(count)
    ])
    db.session.commit()


def test_list_requires_login(client, school):
    response = client.get('/list/exams')
    assert response.status_code == 401


def test_unknown_list_is_404(login):
    client = login('admin-1', UserRoles.ADMIN)
    assert client.get('/list/spaceships').status_code == 404


def test_role_without_list_access_is_forbidden(login, school):
    client = login('student-1', UserRoles.STUDENT)
    response = client.get('/list/payroll')
    assert response.status_code == 403
    assert response.get_json()['success'] is False


def test_admin_sees_every_exam(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/list/exams').get_json()
    assert body['success'] is True
    assert body['count'] == 2
    assert sorted(row['title'] for row in body['data']) == ['Algebra Midterm', 'Geometry Midterm']


def test_teacher_sees_only_exams_of_own_lessons(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    response = client.get('/list/exams')
    assert titles(response) == ['Algebra Midterm']
    assert response.get_json()['count'] == 1


def test_crafted_filter_cannot_widen_scope(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    body = client.get(f'/list/exams?lessonId={school.lesson2}').get_json()
    assert body['count'] == 0
    assert body['data'] == []

    student = login('student-1', UserRoles.STUDENT)
    body = student.get('/list/results?studentId=student-2').get_json()
    assert body['count'] == 0


def test_student_and_parent_see_their_own_results(login, school):
    client = login('student-2', UserRoles.STUDENT)
    rows = client.get('/list/results').get_json()['data']
    assert [row['id'] for row in rows] == [school.result2]

    client = login('parent-1', UserRoles.PARENT)
    rows = client.get('/list/attendance').get_json()['data']
    assert [row['id'] for row in rows] == [school.attendance1]


def test_teacher_sees_students_of_classes_taught(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    body = client.get('/list/students').get_json()
    assert [row['id'] for row in body['data']] == ['student-1']

    body = client.get(f'/list/students?classId={school.class_b}').get_json()
    assert body['count'] == 0


def test_events_include_schoolwide_and_own_class(login, school):
    client = login('student-1', UserRoles.STUDENT)
    assert titles(client.get('/list/events')) == ['Sports Day', '1A Museum Trip']

    client = login('teacher-2', UserRoles.TEACHER)
    assert titles(client.get('/list/events')) == ['Sports Day', '1B Zoo Trip']


def test_pages_cover_every_row_exactly_once(login, app):
    add_expenses(25)
    client = login('admin-1', UserRoles.ADMIN)

    seen = []
    for page in (1, 2, 3):
        body = client.get(f'/list/expenses?page={page}').get_json()
        assert body['count'] == 25
        assert body['total_pages'] == 3
        seen.extend(row['id'] for row in body['data'])

    assert len(seen) == 25
    assert len(set(seen)) == 25
    assert client.get('/list/expenses?page=4').get_json()['data'] == []


def test_missing_or_bad_page_means_first_page(login, app):
    add_expenses(12)
    client = login('admin-1', UserRoles.ADMIN)
    first = client.get('/list/expenses').get_json()
    assert first['page'] == 1
    assert len(first['data']) == 10
    assert client.get('/list/expenses?page=abc').get_json()['data'] == first['data']
    assert client.get('/list/expenses?page=0').get_json()['page'] == 1


def test_parse_page():
    assert parse_page(None) == 1
    assert parse_page('3') == 3
    assert parse_page('-2') == 1
    assert parse_page('two') == 1


def test_invalid_filter_value_is_rejected(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.get('/list/classes?gradeId=first')
    assert response.status_code == 400
    body = response.get_json()
    assert body['success'] is False
    assert body['filter'] == 'gradeId'

    assert client.get('/list/attendance?date=yesterday').status_code == 400
    assert client.get('/list/rooms?available=maybe').status_code == 400


def test_amount_bounds_are_both_applied(login, app):
    db.session.add_all([
        Expense(title='Pens', amount=5, date=datetime(2025, 2, 1), category='Supplies'),
        Expense(title='Paint', amount=50, date=datetime(2025, 2, 2), category='Maintenance'),
        Expense(title='Bus', amount=500, date=datetime(2025, 2, 3), category='Transportation'),
    ])
    db.session.commit()
    client = login('admin-1', UserRoles.ADMIN)

    assert titles(client.get('/list/expenses?minAmount=10&maxAmount=100')) == ['Paint']
    assert titles(client.get('/list/expenses?minAmount=10&category=Transportation')) == ['Bus']


def test_search_is_case_insensitive_and_literal(login, app):
    db.session.add_all([
        Expense(title='100% recycled paper', amount=5, date=datetime(2025, 2, 1), category='Supplies'),
        Expense(title='Printer paper', amount=5, date=datetime(2025, 2, 2), category='Supplies'),
    ])
    db.session.commit()
    client = login('admin-1', UserRoles.ADMIN)

    assert len(titles(client.get('/list/expenses?search=PAPER'))) == 2
    assert titles(client.get('/list/expenses?search=%25')) == ['100% recycled paper']


def test_search_reaches_related_rows(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/list/results?search=frank').get_json()
    assert [row['id'] for row in body['data']] == [school.result2]


def test_attendance_date_filter_matches_whole_day(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/list/attendance?date=2025-10-06').get_json()
    assert [row['id'] for row in body['data']] == [school.attendance1]


def test_lessons_are_ordered_by_weekday(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/list/lessons').get_json()
    assert [row['day'] for row in body['data']] == ['MONDAY', 'TUESDAY']


def test_run_list_query_directly(school):
    exam = get_entity('exams')
    page = run_list_query(exam.list_spec, RequestContext('parent-2', UserRoles.PARENT), {}, per_page=5)
    assert page.count == 1
    assert [row.id for row in page.data] == [school.exam2]
    assert page.total_pages == 1


def test_detail_is_scoped(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    assert client.get(f'/list/exams/{school.exam1}').get_json()['data']['title'] == 'Algebra Midterm'
    assert client.get(f'/list/exams/{school.exam2}').status_code == 404
    assert client.get('/list/exams/not-a-number').status_code == 404


def test_teachers_filtered_by_class_they_teach(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get(f'/list/teachers?classId={school.class_a}').get_json()
    assert [row['id'] for row in body['data']] == ['teacher-1']


def test_students_filtered_by_teacher(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/list/students?teacherId=teacher-2').get_json()
    assert [row['id'] for row in body['data']] == ['student-2']


def test_parents_found_by_child_name(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get('/list/parents?search=emma').get_json()
    assert [row['id'] for row in body['data']] == ['parent-1']


def test_unused_query_keys_share_one_cached_page(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    for i in range(50):
        assert client.get(f'/list/expenses?junk={i}').status_code == 200
    assert len(get_list_cache()) == 1

    client.get('/list/expenses?category=Supplies')
    client.get('/list/expenses?page=2')
    assert len(get_list_cache()) == 3
