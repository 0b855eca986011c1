from datetime import datetime

from models import AcademicYear, Budget, Department, Exam, Expense, Payroll, Term, UserRoles, db
from utils.actions import GENERIC_ERROR
from utils.cache import get_list_cache


def exam_payload(lesson_id, **overrides):
    payload = {
        'title': 'Algebra Final',
        'start_time': '2025-12-01T09:00',
        'end_time': '2025-12-01T11:00',
        'lesson_id': lesson_id,
        'total_marks': 50,
        'passing_marks': 20,
        'has_grading': True,
    }
    payload.update(overrides)
    return payload


def test_create_then_list_shows_record_once(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/departments/create', json={'name': 'Science'})
    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['name'] == 'Science'

    listed = client.get('/list/departments?search=science').get_json()
    assert listed['count'] == 1
    assert listed['data'][0]['id'] == body['data']['id']


def test_validation_errors_are_reported_per_field(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/departments/create', json={'name': ''})
    assert response.status_code == 400
    body = response.get_json()
    assert body['success'] is False
    assert 'name' in body['errors']
    assert Department.query.count() == 0


def test_persistence_failure_returns_generic_message(login, app):
    db.session.add(Department(name='Languages'))
    db.session.commit()
    client = login('admin-1', UserRoles.ADMIN)

    response = client.post('/list/departments/create', json={'name': 'Languages'})
    assert response.status_code == 500
    body = response.get_json()
    assert body == {'success': False, 'error': True, 'message': GENERIC_ERROR}
    assert Department.query.count() == 1


def test_form_post_without_json_body(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/grades/create', data={'level': '4'})
    assert response.status_code == 201
    assert response.get_json()['data']['level'] == 4


def test_academic_year_with_terms_cannot_be_deleted(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post(f'/list/academic-years/{school.year}/delete')
    assert response.status_code == 409
    assert response.get_json()['message'] == "Cannot delete academic year with associated terms"
    assert db.session.get(AcademicYear, school.year) is not None


def test_academic_year_without_terms_is_deleted(login, school):
    empty = AcademicYear(name='2030/31', start_date=datetime(2030, 9, 1), end_date=datetime(2031, 7, 31))
    db.session.add(empty)
    db.session.commit()
    empty_id = empty.id

    client = login('admin-1', UserRoles.ADMIN)
    response = client.post(f'/list/academic-years/{empty_id}/delete')
    assert response.status_code == 200
    assert response.get_json()['success'] is True
    assert db.session.get(AcademicYear, empty_id) is None


def test_term_with_exams_cannot_be_deleted(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post(f'/list/terms/{school.term}/delete')
    assert response.status_code == 409
    assert response.get_json()['message'] == "Cannot delete term with associated exams or report cards"

    spare = Term(name='Term 2', start_date=datetime(2026, 1, 5), end_date=datetime(2026, 4, 1),
                 academic_year_id=school.year)
    db.session.add(spare)
    db.session.commit()
    assert client.post(f'/list/terms/{spare.id}/delete').status_code == 200


def test_only_one_academic_year_is_current(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/academic-years/create', json={
        'name': '2026/27',
        'start_date': '2026-09-01',
        'end_date': '2027-07-31',
        'is_current': True,
    })
    assert response.status_code == 201
    new_id = response.get_json()['data']['id']

    db.session.expire_all()
    current = AcademicYear.query.filter_by(is_current=True).all()
    assert [year.id for year in current] == [new_id]


def test_end_date_before_start_date_is_invalid(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/academic-years/create', json={
        'name': '2027/28', 'start_date': '2027-09-01', 'end_date': '2027-01-01',
    })
    assert response.status_code == 400
    assert 'end_date' in response.get_json()['errors']


def test_payroll_net_salary_is_computed_on_save(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/payroll/create', json={
        'amount': 1000, 'tax_amount': 100, 'bonus_amount': 50, 'net_salary': 99999,
        'pay_date': '2025-10-31', 'teacher_id': 'teacher-1', 'month': 10, 'year': 2025,
    })
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['net_salary'] == 950
    assert data['net_salary_display'] == '$ 950.00'

    # cleared tax and bonus count as zero
    response = client.post(f"/list/payroll/{data['id']}/update", json={
        'amount': 1200, 'tax_amount': '', 'bonus_amount': '',
        'pay_date': '2025-10-31', 'teacher_id': 'teacher-1', 'month': 10, 'year': 2025,
    })
    assert response.status_code == 200
    assert db.session.get(Payroll, data['id']).net_salary == 1200


def test_result_outcome_is_computed_for_graded_exam(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    exam = client.post('/list/exams/create', json=exam_payload(school.lesson1)).get_json()['data']

    response = client.post('/list/results/create', json={
        'score': 40, 'practical_score': 5, 'grade': 'F', 'is_passed': False,
        'exam_id': exam['id'], 'student_id': 'student-1',
    })
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['total_obtained'] == 45
    assert data['is_passed'] is True
    assert data['grade'] == 'A+'


def test_result_needs_an_exam_or_assignment(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/results/create', json={'score': 10, 'student_id': 'student-1'})
    assert response.status_code == 400
    assert 'exam_id' in response.get_json()['errors']


def test_report_card_grade_follows_percentage(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/report-cards/create', json={
        'total_marks': 450, 'percentage': 82.5, 'grade': 'F', 'issue_date': '2025-12-15',
        'student_id': 'student-1', 'term_id': school.term,
    })
    assert response.status_code == 201
    assert response.get_json()['data']['grade'] == 'A'


def test_teacher_cannot_create_exam_for_another_teachers_lesson(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    response = client.post('/list/exams/create', json=exam_payload(school.lesson2, title='Sneaky'))
    assert response.status_code == 403
    assert response.get_json()['success'] is False
    assert Exam.query.filter_by(title='Sneaky').first() is None


def test_teacher_cannot_update_or_delete_out_of_scope_exam(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    payload = exam_payload(school.lesson2, title='Renamed')
    assert client.post(f'/list/exams/{school.exam2}/update', json=payload).status_code == 404
    assert client.post(f'/list/exams/{school.exam2}/delete').status_code == 404
    assert db.session.get(Exam, school.exam2).title == 'Geometry Midterm'


def test_teacher_cannot_move_own_exam_to_another_lesson(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    payload = exam_payload(school.lesson2, title='Algebra Midterm')
    assert client.post(f'/list/exams/{school.exam1}/update', json=payload).status_code == 403
    db.session.expire_all()
    assert db.session.get(Exam, school.exam1).lesson_id == school.lesson1


def test_teacher_updates_own_exam(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    payload = exam_payload(school.lesson1, title='Algebra Midterm (rescheduled)')
    response = client.post(f'/list/exams/{school.exam1}/update', json=payload)
    assert response.status_code == 200
    assert response.get_json()['data']['title'] == 'Algebra Midterm (rescheduled)'


def test_student_cannot_write(login, school):
    client = login('student-1', UserRoles.STUDENT)
    assert client.post('/list/exams/create', json=exam_payload(school.lesson1)).status_code == 403


def test_delete_of_missing_record_is_404(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    assert client.post('/list/students/nobody/delete').status_code == 404


def test_successful_write_invalidates_cached_list(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    cache = get_list_cache()

    assert client.get('/list/expenses').get_json()['count'] == 0
    assert len(cache) == 1

    # rows added behind the cache's back stay hidden until a write invalidates it
    db.session.add(Expense(title='Mop', amount=12, date=datetime(2025, 3, 1), category='Maintenance'))
    db.session.commit()
    assert client.get('/list/expenses').get_json()['count'] == 0

    response = client.post('/list/expenses/create', json={
        'title': 'Bucket', 'amount': 8, 'date': '2025-03-02', 'category': 'Maintenance',
    })
    assert response.status_code == 201
    assert len(cache) == 0
    assert client.get('/list/expenses').get_json()['count'] == 2


def test_rejected_write_keeps_cache(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    client.get('/list/expenses')
    client.post('/list/expenses/create', json={'title': ''})
    assert len(get_list_cache()) == 1


def test_budget_defaults_to_operations(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/budgets/create', json={
        'title': 'Term 1 running costs', 'total_amount': 800, 'utilized_amount': 300,
        'allocated_date': '2025-09-01',
    })
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['category'] == 'Operations'
    assert data['utilization_percentage'] == 38
    assert data['remaining_amount'] == 500


def test_budget_accepts_its_own_categories_only(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    payload = {'title': 'New lab', 'total_amount': 5000, 'allocated_date': '2025-09-01'}

    response = client.post('/list/budgets/create', json=dict(payload, category='Infrastructure'))
    assert response.status_code == 201
    assert response.get_json()['data']['utilization_percentage'] == 0

    response = client.post('/list/budgets/create', json=dict(payload, category='Supplies'))
    assert response.status_code == 400
    assert 'category' in response.get_json()['errors']


def test_empty_budget_has_zero_utilization(app):
    assert Budget(title='Unfunded', total_amount=0, utilized_amount=10).utilization_percentage == 0


def test_expense_category_defaults_to_supplies(login, app):
    client = login('admin-1', UserRoles.ADMIN)
    response = client.post('/list/expenses/create', json={
        'title': 'Chalk', 'amount': 4.5, 'date': '2025-03-02',
    })
    assert response.status_code == 201
    assert response.get_json()['data']['category'] == 'Supplies'
