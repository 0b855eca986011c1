from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from app import create_app
from models import (AcademicYear, Assignment, Attendance, Event, Exam, Grade, Lesson, Parent,
                    Result, SchoolClass, Student, Subject, Teacher, Term, db)
from utils.settings import SystemSettings


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "x" * 40,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "WTF_CSRF_ENABLED": False,
        "ITEM_PER_PAGE": 10,
        "LIST_CACHE_ENABLED": True,
        "LIST_CACHE_TTL": 60,
        "LOG_FILE": None,
    })
    with app.app_context():
        db.create_all()
        SystemSettings.invalidate_cache()
        yield app
        db.session.remove()
        db.drop_all()
    SystemSettings.invalidate_cache()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id, role):
        with client.session_transaction() as sess:
            sess['user_id'] = user_id
            sess['user_role'] = role
        return client
    return _login


def make_teacher(user_id, name, surname='Teacher'):
    return Teacher(id=user_id, username=user_id, name=name, surname=surname, address='School Road',
                   blood_type='O+', sex='FEMALE', birthday=date(1985, 3, 14))


def make_parent(user_id, name, surname='Parent'):
    return Parent(id=user_id, username=user_id, name=name, surname=surname,
                  phone='0700000000', address='Main Street')


def make_student(user_id, name, school_class, grade, parent, surname='Student'):
    return Student(id=user_id, username=user_id, name=name, surname=surname, address='Main Street',
                   blood_type='A+', sex='MALE', birthday=date(2014, 6, 1),
                   school_class=school_class, grade=grade, parent=parent)


@pytest.fixture
def school(app):
    """Two classes, each with its own teacher, student, parent, lesson, exam and result"""
    upcoming = datetime.utcnow() + timedelta(days=7)

    grade = Grade(level=1)
    year = AcademicYear(name='2025/26', start_date=datetime(2025, 9, 1),
                        end_date=datetime(2026, 7, 31), is_current=True)
    term = Term(name='Term 1', start_date=datetime(2025, 9, 1), end_date=datetime(2025, 12, 15),
                academic_year=year)

    teacher1 = make_teacher('teacher-1', 'Alice')
    teacher2 = make_teacher('teacher-2', 'Brian')
    parent1 = make_parent('parent-1', 'Carol')
    parent2 = make_parent('parent-2', 'David')

    class_a = SchoolClass(name='1A', capacity=30, grade=grade, supervisor=teacher1)
    class_b = SchoolClass(name='1B', capacity=30, grade=grade, supervisor=teacher2)

    student1 = make_student('student-1', 'Emma', class_a, grade, parent1)
    student2 = make_student('student-2', 'Frank', class_b, grade, parent2)

    maths = Subject(name='Mathematics')
    lesson1 = Lesson(name='Algebra', day='MONDAY', start_time=datetime(2025, 9, 1, 8),
                     end_time=datetime(2025, 9, 1, 9), subject=maths, school_class=class_a,
                     teacher=teacher1)
    lesson2 = Lesson(name='Geometry', day='TUESDAY', start_time=datetime(2025, 9, 2, 8),
                     end_time=datetime(2025, 9, 2, 9), subject=maths, school_class=class_b,
                     teacher=teacher2)

    exam1 = Exam(title='Algebra Midterm', start_time=datetime(2025, 10, 1, 9),
                 end_time=datetime(2025, 10, 1, 11), lesson=lesson1, term=term)
    exam2 = Exam(title='Geometry Midterm', start_time=datetime(2025, 10, 2, 9),
                 end_time=datetime(2025, 10, 2, 11), lesson=lesson2)
    assignment1 = Assignment(title='Algebra Homework', start_date=datetime(2025, 9, 10),
                             due_date=datetime(2025, 9, 17), lesson=lesson1)

    result1 = Result(score=30, total_obtained=30, is_passed=False, exam=exam1, student=student1)
    result2 = Result(score=40, total_obtained=40, is_passed=True, exam=exam2, student=student2)

    attendance1 = Attendance(date=datetime(2025, 10, 6, 9), present=True, student=student1, lesson=lesson1)
    attendance2 = Attendance(date=datetime(2025, 10, 7, 9), present=False, student=student2, lesson=lesson2)

    sports_day = Event(title='Sports Day', description='Whole school', start_time=upcoming,
                       end_time=upcoming + timedelta(hours=4))
    trip_a = Event(title='1A Museum Trip', description='', start_time=upcoming + timedelta(days=1),
                   end_time=upcoming + timedelta(days=1, hours=3), school_class=class_a)
    trip_b = Event(title='1B Zoo Trip', description='', start_time=upcoming + timedelta(days=2),
                   end_time=upcoming + timedelta(days=2, hours=3), school_class=class_b)

    db.session.add_all([
        grade, year, term, teacher1, teacher2, parent1, parent2, class_a, class_b,
        student1, student2, maths, lesson1, lesson2, exam1, exam2, assignment1,
        result1, result2, attendance1, attendance2, sports_day, trip_a, trip_b,
    ])
    db.session.commit()

    return SimpleNamespace(
        grade=grade.id, year=year.id, term=term.id,
        class_a=class_a.id, class_b=class_b.id, subject=maths.id,
        lesson1=lesson1.id, lesson2=lesson2.id,
        exam1=exam1.id, exam2=exam2.id, assignment1=assignment1.id,
        result1=result1.id, result2=result2.id,
        attendance1=attendance1.id, attendance2=attendance2.id,
        sports_day=sports_day.id, trip_a=trip_a.id, trip_b=trip_b.id,
    )
