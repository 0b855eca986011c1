from sqlalchemy import or_, select

from models import (Assignment, Attendance, Exam, ExamType, Lesson, ReportCard, Result, SchoolClass,
                    Student, Subject, Term, UserRoles, db)
from forms import (AssignmentForm, AttendanceForm, ExamForm, ExamTypeForm, ReportCardForm,
                   ResultForm)
from utils.derived import grade_letter, result_outcome, result_total
from utils.list_query import ListSpec, day_range, eq, ilike
from . import options, scopes
from .base import EntityConfig

ADMIN = UserRoles.ADMIN
TEACHER = UserRoles.TEACHER
STUDENT = UserRoles.STUDENT
PARENT = UserRoles.PARENT
EVERY_ROLE = (ADMIN, TEACHER, STUDENT, PARENT)

STUDENT_NAME = (
    select(Student.name)
    .where(Student.id == Attendance.student_id)
    .scalar_subquery()
)


def lesson_scopes(relationship):
    return {
        TEACHER: scopes.via_lesson(relationship, scopes.lessons_taught),
        STUDENT: scopes.via_lesson(relationship, scopes.lessons_attended),
        PARENT: scopes.via_lesson(relationship, scopes.lessons_of_children),
    }


def lesson_search(model):
    return [
        ilike(model.title),
        ilike(Subject.name, model.lesson, Lesson.subject),
        ilike(SchoolClass.name, model.lesson, Lesson.school_class),
    ]


def results_taught(ctx):
    taught = Lesson.teacher_id == ctx.user_id
    return or_(
        Result.exam.has(Exam.lesson.has(taught)),
        Result.assignment.has(Assignment.lesson.has(taught)),
    )


def apply_result_outcome(record):
    record.total_obtained = result_total(record.score, record.practical_score)
    exam = db.session.get(Exam, record.exam_id) if record.exam_id else None
    assignment = db.session.get(Assignment, record.assignment_id) if record.assignment_id else None
    record.is_passed, grade = result_outcome(record.total_obtained, exam=exam, assignment=assignment)
    if grade is not None:
        record.grade = grade


def apply_report_card_grade(record):
    record.grade = grade_letter(record.percentage)


exam_type = EntityConfig(
    'exam_type', 'exam-types', ExamType, ExamTypeForm,
    ListSpec(ExamType, search=[ilike(ExamType.name)], scopes={TEACHER: scopes.everyone},
             order_by=[ExamType.name]),
    list_roles=(ADMIN, TEACHER),
)

exam = EntityConfig(
    'exam', 'exams', Exam, ExamForm,
    ListSpec(
        Exam,
        filters={'lessonId': eq(Exam.lesson_id), 'termId': eq(Exam.term_id)},
        search=lesson_search(Exam),
        scopes=lesson_scopes(Exam.lesson),
        order_by=[Exam.start_time.desc()],
    ),
    related={
        'lessons': options.lessons,
        'exam_types': options.exam_types,
        'terms': options.terms,
    },
    list_roles=EVERY_ROLE,
    write_roles=(ADMIN, TEACHER),
)

assignment = EntityConfig(
    'assignment', 'assignments', Assignment, AssignmentForm,
    ListSpec(
        Assignment,
        filters={'lessonId': eq(Assignment.lesson_id)},
        search=lesson_search(Assignment),
        scopes=lesson_scopes(Assignment.lesson),
        order_by=[Assignment.due_date],
    ),
    related={'lessons': options.lessons},
    list_roles=EVERY_ROLE,
    write_roles=(ADMIN, TEACHER),
)

result = EntityConfig(
    'result', 'results', Result, ResultForm,
    ListSpec(
        Result,
        filters={
            'studentId': eq(Result.student_id, str),
            'examId': eq(Result.exam_id),
            'assignmentId': eq(Result.assignment_id),
        },
        search=[
            ilike(Exam.title, Result.exam),
            ilike(Assignment.title, Result.assignment),
            ilike(Student.name, Result.student),
            ilike(Student.surname, Result.student),
        ],
        scopes={
            TEACHER: results_taught,
            STUDENT: scopes.own(Result.student_id),
            PARENT: scopes.children(Result.student),
        },
        order_by=[Result.exam_id.desc(), Result.assignment_id.desc()],
    ),
    related={
        'students': options.students,
        'exams': options.exams,
        'assignments': options.assignments,
        'report_cards': options.report_cards,
    },
    list_roles=EVERY_ROLE,
    write_roles=(ADMIN, TEACHER),
    before_save=apply_result_outcome,
)

report_card = EntityConfig(
    'report_card', 'report-cards', ReportCard, ReportCardForm,
    ListSpec(
        ReportCard,
        filters={
            'termId': eq(ReportCard.term_id),
            'studentId': eq(ReportCard.student_id, str),
        },
        search=[
            ilike(Student.name, ReportCard.student),
            ilike(Student.surname, ReportCard.student),
            ilike(Term.name, ReportCard.term),
            ilike(ReportCard.grade),
        ],
        scopes={
            TEACHER: scopes.everyone,
            STUDENT: scopes.own(ReportCard.student_id),
            PARENT: scopes.children(ReportCard.student),
        },
        order_by=[ReportCard.issue_date.desc()],
    ),
    related={
        'students': options.students,
        'terms': options.terms,
        'results': options.unassigned_results,
    },
    list_roles=EVERY_ROLE,
    before_save=apply_report_card_grade,
)

attendance = EntityConfig(
    'attendance', 'attendance', Attendance, AttendanceForm,
    ListSpec(
        Attendance,
        filters={
            'studentId': eq(Attendance.student_id, str),
            'lessonId': eq(Attendance.lesson_id),
            'date': day_range(Attendance.date),
        },
        search=[
            ilike(Student.name, Attendance.student),
            ilike(Student.surname, Attendance.student),
            ilike(Lesson.name, Attendance.lesson),
        ],
        scopes={
            TEACHER: scopes.via_lesson(Attendance.lesson, scopes.lessons_taught),
            STUDENT: scopes.own(Attendance.student_id),
            PARENT: scopes.children(Attendance.student),
        },
        order_by=[Attendance.date.desc(), STUDENT_NAME],
    ),
    related={
        'students': options.students,
        'lessons': options.attendance_lessons,
    },
    list_roles=EVERY_ROLE,
    write_roles=(ADMIN, TEACHER),
)

ENTITIES = [exam_type, exam, assignment, result, report_card, attendance]
