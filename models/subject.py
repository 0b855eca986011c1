from datetime import datetime

from . import db, iso
from .user import teacher_subjects


curriculum_subjects = db.Table(
    'curriculum_subjects',
    db.Column('curriculum_id', db.Integer, db.ForeignKey('curricula.id'), primary_key=True),
    db.Column('subject_id', db.Integer, db.ForeignKey('subjects.id'), primary_key=True),
)


class Department(db.Model):
    __tablename__ = 'departments'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Department {self.name}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'created_at': iso(self.created_at),
        }


class Subject(db.Model):
    __tablename__ = 'subjects'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True, index=True)
    department_id = db.Column(db.Integer, db.ForeignKey('departments.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    department = db.relationship('Department', backref='subjects')
    teachers = db.relationship('Teacher', secondary=teacher_subjects, back_populates='subjects')

    def __repr__(self):
        return f"<Subject {self.name}>"

    @property
    def teacher_ids(self):
        return [teacher.id for teacher in self.teachers]

    @teacher_ids.setter
    def teacher_ids(self, ids):
        from .user import Teacher
        ids = [str(i) for i in ids or []]
        self.teachers = Teacher.query.filter(Teacher.id.in_(ids)).all() if ids else []

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'department_id': self.department_id,
            'department': self.department.name if self.department else None,
            'teacher_ids': self.teacher_ids,
            'teachers': [teacher.get_full_name() for teacher in self.teachers],
        }


class Curriculum(db.Model):
    __tablename__ = 'curricula'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    grade_id = db.Column(db.Integer, db.ForeignKey('grades.id'), nullable=False, index=True)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_years.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    grade = db.relationship('Grade', backref='curricula')
    academic_year = db.relationship('AcademicYear', backref='curricula')
    subjects = db.relationship('Subject', secondary=curriculum_subjects, backref='curricula')

    def __repr__(self):
        return f"<Curriculum {self.name}>"

    @property
    def subject_ids(self):
        return [subject.id for subject in self.subjects]

    @subject_ids.setter
    def subject_ids(self, ids):
        ids = [int(i) for i in ids or []]
        self.subjects = Subject.query.filter(Subject.id.in_(ids)).all() if ids else []

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'grade_id': self.grade_id,
            'grade': self.grade.level if self.grade else None,
            'academic_year_id': self.academic_year_id,
            'academic_year': self.academic_year.name if self.academic_year else None,
            'subject_ids': self.subject_ids,
            'subjects': [subject.name for subject in self.subjects],
        }


class Syllabus(db.Model):
    """Syllabus content for a subject, with a completion percentage"""

    __tablename__ = 'syllabi'

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    completion = db.Column(db.Float, nullable=False, default=0)
    subject_id = db.Column(db.Integer, db.ForeignKey('subjects.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = db.relationship('Subject', backref='syllabi')

    def __repr__(self):
        return f"<Syllabus {self.subject_id}: {self.completion}%>"

    def to_dict(self):
        return {
            'id': self.id,
            'content': self.content,
            'description': self.description,
            'completion': self.completion,
            'subject_id': self.subject_id,
            'subject': self.subject.name if self.subject else None,
        }
