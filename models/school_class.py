from datetime import datetime

from . import db, iso


class Grade(db.Model):
    __tablename__ = 'grades'

    id = db.Column(db.Integer, primary_key=True)
    level = db.Column(db.Integer, nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Grade {self.level}>"

    def to_dict(self):
        return {
            'id': self.id,
            'level': self.level,
            'label': f"Grade {self.level}",
            'created_at': iso(self.created_at),
        }


class SchoolClass(db.Model):
    __tablename__ = 'classes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True, index=True)
    capacity = db.Column(db.Integer, nullable=False)
    grade_id = db.Column(db.Integer, db.ForeignKey('grades.id'), nullable=False, index=True)
    supervisor_id = db.Column(db.String(36), db.ForeignKey('teachers.id'), nullable=True, index=True)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_years.id'), nullable=True, index=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    grade = db.relationship('Grade', backref='classes')
    supervisor = db.relationship('Teacher', backref='supervised_classes')
    academic_year = db.relationship('AcademicYear', backref='classes')
    room = db.relationship('Room', backref='classes')

    def __repr__(self):
        return f"<SchoolClass {self.name}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'capacity': self.capacity,
            'grade_id': self.grade_id,
            'grade': self.grade.level if self.grade else None,
            'supervisor_id': self.supervisor_id,
            'supervisor': self.supervisor.get_full_name() if self.supervisor else None,
            'academic_year_id': self.academic_year_id,
            'academic_year': self.academic_year.name if self.academic_year else None,
            'room_id': self.room_id,
            'created_at': iso(self.created_at),
            'updated_at': iso(self.updated_at),
        }


class Section(db.Model):
    __tablename__ = 'sections'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    school_class = db.relationship('SchoolClass', backref='sections')

    __table_args__ = (
        db.UniqueConstraint('class_id', 'name', name='unique_class_section_name'),
    )

    def __repr__(self):
        return f"<Section {self.name}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'class_id': self.class_id,
            'class': self.school_class.name if self.school_class else None,
            'created_at': iso(self.created_at),
        }
