from datetime import datetime

from . import db, iso


class Weekdays:
    MONDAY = 'MONDAY'
    TUESDAY = 'TUESDAY'
    WEDNESDAY = 'WEDNESDAY'
    THURSDAY = 'THURSDAY'
    FRIDAY = 'FRIDAY'

    ALL = [MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY]
    CHOICES = [(day, day.capitalize()) for day in ALL]


class RoomTypes:
    ALL = ['Classroom', 'Laboratory', 'Library', 'Auditorium', 'Gym', 'Cafeteria', 'Office', 'Conference']
    CHOICES = [(t, t) for t in ALL]


class Room(db.Model):
    __tablename__ = 'rooms'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True, index=True)
    capacity = db.Column(db.Integer, nullable=False)
    type = db.Column(db.String(50), nullable=False, default='Classroom')
    location = db.Column(db.String(255), nullable=True)
    available = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Room {self.name}>"

    @property
    def class_ids(self):
        return [cls.id for cls in self.classes]

    @class_ids.setter
    def class_ids(self, ids):
        from .school_class import SchoolClass
        ids = [int(i) for i in ids or []]
        self.classes = SchoolClass.query.filter(SchoolClass.id.in_(ids)).all() if ids else []

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'capacity': self.capacity,
            'type': self.type,
            'location': self.location,
            'available': self.available,
            'class_ids': self.class_ids,
            'created_at': iso(self.created_at),
        }


class Lesson(db.Model):
    """A weekly timetable slot: one subject, one class, one teacher"""

    __tablename__ = 'lessons'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, index=True)
    day = db.Column(db.String(10), nullable=False, index=True)
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime, nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey('subjects.id'), nullable=False, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    teacher_id = db.Column(db.String(36), db.ForeignKey('teachers.id'), nullable=False, index=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    subject = db.relationship('Subject', backref='lessons')
    school_class = db.relationship('SchoolClass', backref='lessons')
    teacher = db.relationship('Teacher', backref='lessons')
    room = db.relationship('Room', backref='lessons')

    def __repr__(self):
        return f"<Lesson {self.name} {self.day}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'day': self.day,
            'start_time': iso(self.start_time),
            'end_time': iso(self.end_time),
            'subject_id': self.subject_id,
            'subject': self.subject.name if self.subject else None,
            'class_id': self.class_id,
            'class': self.school_class.name if self.school_class else None,
            'teacher_id': self.teacher_id,
            'teacher': self.teacher.get_full_name() if self.teacher else None,
            'room_id': self.room_id,
            'room': self.room.name if self.room else None,
        }
