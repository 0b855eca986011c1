from models import Student, UserRoles, db
from entities import get_entity
from utils.context import RequestContext
from utils.related_data import resolve_related_data

ADMIN = RequestContext('admin-1', UserRoles.ADMIN)
TEACHER = RequestContext('teacher-1', UserRoles.TEACHER)


def test_supplied_collections_are_kept_even_when_empty(school):
    related = resolve_related_data(get_entity('exams'), ADMIN, supplied={'terms': [], 'lessons': None})
    assert related['terms'] == []
    assert len(related['lessons']) == 2
    assert related['exam_types'] == []


def test_entity_without_related_data(app):
    assert resolve_related_data(get_entity('departments'), ADMIN) == {}


def test_teacher_picks_only_own_lessons(school):
    related = resolve_related_data(get_entity('exams'), TEACHER)
    assert related['lessons'] == [{'id': school.lesson1, 'label': 'Algebra (Mathematics - 1A)'}]


def test_result_options_are_scoped_to_teacher(school):
    related = resolve_related_data(get_entity('results'), TEACHER)
    assert [option['label'] for option in related['exams']] == ['Algebra Midterm (Total: 100)']
    assert [option['label'] for option in related['assignments']] == ['Algebra Homework (Total: 50)']
    assert [option['id'] for option in related['students']] == ['student-1', 'student-2']


def test_grade_labels(school):
    related = resolve_related_data(get_entity('classes'), ADMIN)
    assert related['grades'] == [{'id': school.grade, 'label': 'Grade 1', 'level': 1}]


def test_create_form_payload(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    body = client.get('/list/exams/form').get_json()
    assert body['success'] is True
    assert body['type'] == 'create'
    assert body['defaults']['total_marks'] == 100
    assert body['defaults']['passing_marks'] == 35
    assert body['defaults']['has_grading'] is False
    assert 'csrf_token' not in body['defaults']
    assert body['csrf_token']
    assert [option['id'] for option in body['related']['lessons']] == [school.lesson1]


def test_update_form_payload(login, school):
    client = login('admin-1', UserRoles.ADMIN)
    body = client.get(f'/list/exams/form?id={school.exam1}').get_json()
    assert body['type'] == 'update'
    assert body['defaults']['title'] == 'Algebra Midterm'
    assert body['defaults']['lesson_id'] == school.lesson1
    assert body['defaults']['start_time'] == '2025-10-01T09:00:00'


def test_update_form_for_unreachable_record(login, school):
    client = login('teacher-1', UserRoles.TEACHER)
    assert client.get(f'/list/exams/form?id={school.exam2}').status_code == 404


def test_parent_form_offers_parentless_students(login, school):
    db.session.get(Student, 'student-2').parent_id = None
    db.session.commit()

    client = login('admin-1', UserRoles.ADMIN)
    create = client.get('/list/parents/form').get_json()
    assert [option['id'] for option in create['related']['students']] == ['student-2']

    update = client.get('/list/parents/form?id=parent-1').get_json()
    assert [option['id'] for option in update['related']['students']] == ['student-1', 'student-2']
    assert update['defaults']['student_ids'] == ['student-1']
