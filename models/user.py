from flask_sqlalchemy import SQLAlchemy
from datetime import datetime
import uuid

db = SQLAlchemy()


def iso(value):
    """ISO-8601 string for a date/datetime column value, or None"""
    return value.isoformat() if value else None


# Role constants
class UserRoles:
    """Roles carried in the identity provider's session claims"""
    ADMIN = 'admin'
    TEACHER = 'teacher'
    STUDENT = 'student'
    PARENT = 'parent'

    ALL = (ADMIN, TEACHER, STUDENT, PARENT)

    CHOICES = [
        (ADMIN, 'Administrator'),
        (TEACHER, 'Teacher'),
        (STUDENT, 'Student'),
        (PARENT, 'Parent'),
    ]


class UserStatus:
    ACTIVE = 'ACTIVE'
    SUSPENDED = 'SUSPENDED'
    ARCHIVED = 'ARCHIVED'

    CHOICES = [
        (ACTIVE, 'Active'),
        (SUSPENDED, 'Suspended'),
        (ARCHIVED, 'Archived'),
    ]


class Sex:
    MALE = 'MALE'
    FEMALE = 'FEMALE'

    CHOICES = [(MALE, 'Male'), (FEMALE, 'Female')]


teacher_subjects = db.Table(
    'teacher_subjects',
    db.Column('teacher_id', db.String(36), db.ForeignKey('teachers.id'), primary_key=True),
    db.Column('subject_id', db.Integer, db.ForeignKey('subjects.id'), primary_key=True),
)


class PersonMixin:
    """Columns shared by every account-backed person record.

    The primary key is the identity provider's user id, so it is a string.
    """

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = db.Column(db.String(20), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    surname = db.Column(db.String(100), nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=UserStatus.ACTIVE, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def get_full_name(self):
        return f"{self.name} {self.surname}".strip()

    def person_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'name': self.name,
            'surname': self.surname,
            'full_name': self.get_full_name(),
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'status': self.status,
            'created_at': iso(self.created_at),
        }


class Admin(PersonMixin, db.Model):
    __tablename__ = 'admins'

    img = db.Column(db.String(255), nullable=True)

    def __repr__(self):
        return f"<Admin {self.username}>"

    def to_dict(self):
        data = self.person_dict()
        data['img'] = self.img
        return data


class Teacher(PersonMixin, db.Model):
    __tablename__ = 'teachers'

    img = db.Column(db.String(255), nullable=True)
    blood_type = db.Column(db.String(10), nullable=False)
    sex = db.Column(db.String(10), nullable=False)
    birthday = db.Column(db.Date, nullable=False)
    department_id = db.Column(db.Integer, db.ForeignKey('departments.id'), nullable=True, index=True)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_years.id'), nullable=True, index=True)

    # Relationships
    department = db.relationship('Department', backref='teachers')
    academic_year = db.relationship('AcademicYear', backref='teachers')
    subjects = db.relationship('Subject', secondary=teacher_subjects, back_populates='teachers')

    def __repr__(self):
        return f"<Teacher {self.username}>"

    @property
    def subject_ids(self):
        return [subject.id for subject in self.subjects]

    @subject_ids.setter
    def subject_ids(self, ids):
        from .subject import Subject
        ids = [int(i) for i in ids or []]
        self.subjects = Subject.query.filter(Subject.id.in_(ids)).all() if ids else []

    def to_dict(self):
        data = self.person_dict()
        data.update({
            'img': self.img,
            'blood_type': self.blood_type,
            'sex': self.sex,
            'birthday': iso(self.birthday),
            'department_id': self.department_id,
            'department': self.department.name if self.department else None,
            'academic_year_id': self.academic_year_id,
            'subject_ids': self.subject_ids,
            'subjects': [subject.name for subject in self.subjects],
        })
        return data


class Parent(PersonMixin, db.Model):
    __tablename__ = 'parents'

    def __repr__(self):
        return f"<Parent {self.username}>"

    @property
    def student_ids(self):
        return [student.id for student in self.students]

    @student_ids.setter
    def student_ids(self, ids):
        ids = [str(i) for i in ids or []]
        self.students = Student.query.filter(Student.id.in_(ids)).all() if ids else []

    def to_dict(self):
        data = self.person_dict()
        data['student_ids'] = self.student_ids
        data['students'] = [student.get_full_name() for student in self.students]
        return data


class Student(PersonMixin, db.Model):
    __tablename__ = 'students'

    img = db.Column(db.String(255), nullable=True)
    blood_type = db.Column(db.String(10), nullable=False)
    sex = db.Column(db.String(10), nullable=False)
    birthday = db.Column(db.Date, nullable=False)

    parent_id = db.Column(db.String(36), db.ForeignKey('parents.id'), nullable=True, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    grade_id = db.Column(db.Integer, db.ForeignKey('grades.id'), nullable=False, index=True)
    section_id = db.Column(db.Integer, db.ForeignKey('sections.id'), nullable=True, index=True)

    # Relationships
    parent = db.relationship('Parent', backref='students')
    school_class = db.relationship('SchoolClass', backref='students')
    grade = db.relationship('Grade', backref='students')
    section = db.relationship('Section', backref='students')

    def __repr__(self):
        return f"<Student {self.username}>"

    def to_dict(self):
        data = self.person_dict()
        data.update({
            'img': self.img,
            'blood_type': self.blood_type,
            'sex': self.sex,
            'birthday': iso(self.birthday),
            'parent_id': self.parent_id,
            'parent': self.parent.get_full_name() if self.parent else None,
            'class_id': self.class_id,
            'class': self.school_class.name if self.school_class else None,
            'grade_id': self.grade_id,
            'grade': self.grade.level if self.grade else None,
            'section_id': self.section_id,
            'section': self.section.name if self.section else None,
        })
        return data
