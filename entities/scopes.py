"""
Role scope predicates shared by the entity list specs.

Each function takes the RequestContext and returns a SQLAlchemy criterion;
``everyone`` returns None so the role sees every row.
"""
from sqlalchemy import or_

from models import Lesson, SchoolClass, Student


def everyone(ctx):
    return None


def lessons_taught(ctx):
    return Lesson.teacher_id == ctx.user_id


def lessons_attended(ctx):
    return Lesson.school_class.has(SchoolClass.students.any(Student.id == ctx.user_id))


def lessons_of_children(ctx):
    return Lesson.school_class.has(SchoolClass.students.any(Student.parent_id == ctx.user_id))


def classes_taught(ctx):
    return SchoolClass.lessons.any(Lesson.teacher_id == ctx.user_id)


def classes_attended(ctx):
    return SchoolClass.students.any(Student.id == ctx.user_id)


def classes_of_children(ctx):
    return SchoolClass.students.any(Student.parent_id == ctx.user_id)


def via_lesson(relationship, lesson_scope):
    """Scope a lesson-owned model (exam, assignment, attendance) by its lesson"""
    return lambda ctx: relationship.has(lesson_scope(ctx))


def own(column):
    return lambda ctx: column == ctx.user_id


def children(relationship):
    """Rows whose student has the caller as parent"""
    return lambda ctx: relationship.has(Student.parent_id == ctx.user_id)


def class_or_schoolwide(column, relationship, class_scope):
    """Rows without a class, or whose class is in the caller's class scope"""
    return lambda ctx: or_(column.is_(None), relationship.has(class_scope(ctx)))
