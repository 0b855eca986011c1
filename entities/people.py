from models import Admin, Lesson, Parent, SchoolClass, Student, Teacher, UserRoles
from forms import AdminForm, ParentForm, StudentForm, TeacherForm
from utils.list_query import ListSpec, eq, ilike, via
from . import options, scopes
from .base import EntityConfig

ADMIN = UserRoles.ADMIN
TEACHER = UserRoles.TEACHER


def person_search(model):
    return [ilike(model.name), ilike(model.surname), ilike(model.username)]


admin = EntityConfig(
    'admin', 'admins', Admin, AdminForm,
    ListSpec(Admin, search=person_search(Admin), order_by=[Admin.name, Admin.surname]),
)

teacher = EntityConfig(
    'teacher', 'teachers', Teacher, TeacherForm,
    ListSpec(
        Teacher,
        filters={
            'classId': via(Teacher.lessons, eq(Lesson.class_id)),
            'departmentId': eq(Teacher.department_id),
        },
        search=person_search(Teacher),
        scopes={TEACHER: scopes.everyone},
        order_by=[Teacher.name, Teacher.surname],
    ),
    related={
        'subjects': options.subjects,
        'departments': options.departments,
        'academic_years': options.academic_years,
    },
    list_roles=(ADMIN, TEACHER),
)

student = EntityConfig(
    'student', 'students', Student, StudentForm,
    ListSpec(
        Student,
        filters={
            'classId': eq(Student.class_id),
            'gradeId': eq(Student.grade_id),
            'teacherId': via(Student.school_class, via(SchoolClass.lessons, eq(Lesson.teacher_id, str))),
        },
        search=person_search(Student),
        scopes={
            TEACHER: lambda ctx: Student.school_class.has(scopes.classes_taught(ctx)),
        },
        order_by=[Student.name, Student.surname],
    ),
    related={
        'grades': options.grades,
        'classes': options.classes,
        'sections': options.sections,
        'parents': options.active_parents,
    },
    list_roles=(ADMIN, TEACHER),
)

parent = EntityConfig(
    'parent', 'parents', Parent, ParentForm,
    ListSpec(
        Parent,
        search=person_search(Parent) + [
            ilike(Student.name, Parent.students),
            ilike(Student.surname, Parent.students),
        ],
        scopes={TEACHER: scopes.everyone},
        order_by=[Parent.name, Parent.surname],
    ),
    related={'students': options.parentless_students},
    list_roles=(ADMIN, TEACHER),
)

ENTITIES = [admin, teacher, student, parent]
