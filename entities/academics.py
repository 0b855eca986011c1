from sqlalchemy import case

from models import (Curriculum, Department, Grade, Lesson, Room, SchoolClass, Section, Subject,
                    Syllabus, Teacher, UserRoles, Weekdays)
from forms import (ClassForm, CurriculumForm, DepartmentForm, GradeForm, LessonForm, RoomForm,
                   SectionForm, SubjectForm, SyllabusForm)
from utils.list_query import ListSpec, bool_eq, eq, ilike
from . import options, scopes
from .base import EntityConfig

ADMIN = UserRoles.ADMIN
TEACHER = UserRoles.TEACHER

# weekday order, not alphabetical
DAY_ORDER = case({day: index for index, day in enumerate(Weekdays.ALL)}, value=Lesson.day)


department = EntityConfig(
    'department', 'departments', Department, DepartmentForm,
    ListSpec(Department, search=[ilike(Department.name)], order_by=[Department.name]),
)

grade = EntityConfig(
    'grade', 'grades', Grade, GradeForm,
    ListSpec(Grade, scopes={TEACHER: scopes.everyone}, order_by=[Grade.level]),
    list_roles=(ADMIN, TEACHER),
)

subject = EntityConfig(
    'subject', 'subjects', Subject, SubjectForm,
    ListSpec(
        Subject,
        filters={'departmentId': eq(Subject.department_id)},
        search=[ilike(Subject.name), ilike(Department.name, Subject.department)],
        scopes={TEACHER: scopes.everyone},
        order_by=[Subject.name],
    ),
    related={'teachers': options.teachers, 'departments': options.departments},
    list_roles=(ADMIN, TEACHER),
)

school_class = EntityConfig(
    'class', 'classes', SchoolClass, ClassForm,
    ListSpec(
        SchoolClass,
        filters={
            'supervisorId': eq(SchoolClass.supervisor_id, str),
            'gradeId': eq(SchoolClass.grade_id),
            'academicYearId': eq(SchoolClass.academic_year_id),
        },
        search=[ilike(SchoolClass.name)],
        scopes={TEACHER: scopes.everyone},
        order_by=[SchoolClass.name],
    ),
    related={
        'teachers': options.teachers,
        'grades': options.grades,
        'academic_years': options.academic_years,
    },
    list_roles=(ADMIN, TEACHER),
)

section = EntityConfig(
    'section', 'sections', Section, SectionForm,
    ListSpec(
        Section,
        filters={'class': eq(Section.class_id)},
        search=[ilike(Section.name)],
        scopes={TEACHER: scopes.everyone},
        order_by=[Section.name],
    ),
    related={'classes': options.classes},
    list_roles=(ADMIN, TEACHER),
)

lesson = EntityConfig(
    'lesson', 'lessons', Lesson, LessonForm,
    ListSpec(
        Lesson,
        filters={
            'classId': eq(Lesson.class_id),
            'teacherId': eq(Lesson.teacher_id, str),
        },
        search=[
            ilike(Lesson.name),
            ilike(Subject.name, Lesson.subject),
            ilike(Teacher.name, Lesson.teacher),
            ilike(SchoolClass.name, Lesson.school_class),
        ],
        scopes={TEACHER: scopes.lessons_taught},
        order_by=[DAY_ORDER, Lesson.start_time],
    ),
    related={
        'subjects': options.subjects,
        'classes': options.classes,
        'teachers': options.teachers,
        'rooms': options.available_rooms,
    },
    list_roles=(ADMIN, TEACHER),
    write_roles=(ADMIN, TEACHER),
)

curriculum = EntityConfig(
    'curriculum', 'curriculum', Curriculum, CurriculumForm,
    ListSpec(
        Curriculum,
        filters={
            'gradeId': eq(Curriculum.grade_id),
            'academicYearId': eq(Curriculum.academic_year_id),
        },
        search=[ilike(Curriculum.name), ilike(Curriculum.description)],
        scopes={TEACHER: scopes.everyone},
        order_by=[Curriculum.name],
    ),
    related={
        'grades': options.grades,
        'academic_years': options.academic_years,
        'subjects': options.subjects,
    },
    list_roles=(ADMIN, TEACHER),
)

syllabus = EntityConfig(
    'syllabus', 'syllabus', Syllabus, SyllabusForm,
    ListSpec(
        Syllabus,
        filters={'subjectId': eq(Syllabus.subject_id)},
        search=[ilike(Syllabus.description), ilike(Subject.name, Syllabus.subject)],
        scopes={TEACHER: scopes.everyone},
        order_by=[Syllabus.id],
    ),
    related={'subjects': options.subjects},
    list_roles=(ADMIN, TEACHER),
)

room = EntityConfig(
    'room', 'rooms', Room, RoomForm,
    ListSpec(
        Room,
        filters={
            'type': eq(Room.type, str),
            'available': bool_eq(Room.available),
        },
        search=[ilike(Room.name), ilike(Room.type)],
        scopes={TEACHER: scopes.everyone},
        order_by=[Room.name],
    ),
    related={'classes': options.classes},
    list_roles=(ADMIN, TEACHER),
)

ENTITIES = [department, grade, subject, school_class, section, lesson, curriculum, syllabus, room]
