"""
Option fetchers for the Related-Data Resolver.

Every fetcher has the signature ``fetch(ctx, record) -> [option]`` where an
option is ``{'id': ..., 'label': ..., **extra}``.
"""
from sqlalchemy import or_

from models import (AcademicYear, Assignment, Department, Exam, ExamType, FeeStructure, Grade,
                    Lesson, Parent, ReportCard, Result, Room, SchoolClass, Section, Student,
                    Subject, Teacher, Term, UserRoles, UserStatus)


def _teacher_lessons(query, ctx, relationship=None):
    # teachers only ever pick from their own lessons
    if ctx.role != UserRoles.TEACHER:
        return query
    criterion = Lesson.teacher_id == ctx.user_id
    if relationship is not None:
        criterion = relationship.has(criterion)
    return query.filter(criterion)


def people(model, active_only=False):
    def fetch(ctx, record):
        query = model.query
        if active_only:
            query = query.filter(model.status == UserStatus.ACTIVE)
        return [
            {'id': person.id, 'label': person.get_full_name()}
            for person in query.order_by(model.name, model.surname).all()
        ]
    return fetch


def named(model, order_by=None, **extra_columns):
    """Options labelled by ``model.name`` with optional extra attributes"""
    def fetch(ctx, record):
        rows = model.query.order_by(order_by if order_by is not None else model.name).all()
        options = []
        for row in rows:
            option = {'id': row.id, 'label': row.name}
            for key, attr in extra_columns.items():
                option[key] = getattr(row, attr)
            options.append(option)
        return options
    return fetch


def grades(ctx, record):
    return [
        {'id': grade.id, 'label': f"Grade {grade.level}", 'level': grade.level}
        for grade in Grade.query.order_by(Grade.level).all()
    ]


def academic_years(ctx, record):
    return [
        {'id': year.id, 'label': year.name, 'is_current': year.is_current}
        for year in AcademicYear.query.order_by(AcademicYear.start_date.desc()).all()
    ]


def latest_academic_year(ctx, record):
    year = AcademicYear.query.order_by(AcademicYear.start_date.desc()).first()
    return [{'id': year.id, 'label': year.name, 'is_current': year.is_current}] if year else []


classes = named(SchoolClass)
departments = named(Department)
subjects = named(Subject)
sections = named(Section, class_id='class_id')
terms = named(Term, order_by=Term.start_date, academic_year_id='academic_year_id')
exam_types = named(ExamType, total='total', has_practical='has_practical')

teachers = people(Teacher)
active_teachers = people(Teacher, active_only=True)
students = people(Student)
active_parents = people(Parent, active_only=True)


def available_rooms(ctx, record):
    rooms = Room.query.filter(Room.available.is_(True)).order_by(Room.name).all()
    return [{'id': room.id, 'label': room.name, 'capacity': room.capacity} for room in rooms]


def lessons(ctx, record):
    query = _teacher_lessons(Lesson.query, ctx)
    return [
        {
            'id': lesson.id,
            'label': f"{lesson.name} ({lesson.subject.name} - {lesson.school_class.name})",
        }
        for lesson in query.order_by(Lesson.name).all()
    ]


def attendance_lessons(ctx, record):
    query = _teacher_lessons(Lesson.query, ctx)
    return [
        {
            'id': lesson.id,
            'label': f"{lesson.name} ({lesson.subject.name} - {lesson.day})",
            'class_id': lesson.class_id,
        }
        for lesson in query.order_by(Lesson.name).all()
    ]


def exams(ctx, record):
    query = _teacher_lessons(Exam.query, ctx, Exam.lesson)
    return [
        {
            'id': exam.id,
            'label': f"{exam.title} (Total: {exam.total_marks:g})",
            'total_marks': exam.total_marks,
            'passing_marks': exam.passing_marks,
            'has_grading': exam.has_grading,
        }
        for exam in query.order_by(Exam.start_time.desc()).all()
    ]


def assignments(ctx, record):
    query = _teacher_lessons(Assignment.query, ctx, Assignment.lesson)
    return [
        {
            'id': assignment.id,
            'label': f"{assignment.title} (Total: {assignment.total_marks:g})",
            'total_marks': assignment.total_marks,
        }
        for assignment in query.order_by(Assignment.due_date).all()
    ]


def report_cards(ctx, record):
    cards = ReportCard.query.order_by(ReportCard.issue_date.desc()).all()
    return [
        {
            'id': card.id,
            'label': f"{card.student.get_full_name()} - {card.term.name}",
            'student_id': card.student_id,
        }
        for card in cards
    ]


def unassigned_results(ctx, record):
    """Results not on any report card yet, plus the ones already on this card"""
    query = Result.query
    if record is not None:
        query = query.filter(Result.student_id == record.student_id)
        query = query.filter(or_(Result.report_card_id.is_(None), Result.report_card_id == record.id))
    else:
        query = query.filter(Result.report_card_id.is_(None))
    return [
        {
            'id': result.id,
            'label': f"{result.assessment.title if result.assessment else 'Result'}: {result.total_obtained:g}",
            'student_id': result.student_id,
        }
        for result in query.order_by(Result.id).all()
    ]


def parentless_students(ctx, record):
    """Students without a parent, plus the parent's own children"""
    criterion = Student.parent_id.is_(None)
    if record is not None:
        criterion = or_(criterion, Student.parent_id == record.id)
    rows = Student.query.filter(criterion).order_by(Student.name, Student.surname).all()
    return [{'id': student.id, 'label': student.get_full_name()} for student in rows]


def fee_structures(ctx, record):
    rows = FeeStructure.query.order_by(FeeStructure.name).all()
    return [
        {'id': fee.id, 'label': fee.name, 'amount': fee.amount, 'fee_type': fee.fee_type}
        for fee in rows
    ]
