from datetime import datetime

from . import db, iso


class MeetingStatus:
    SCHEDULED = 'Scheduled'
    COMPLETED = 'Completed'
    CANCELLED = 'Cancelled'

    CHOICES = [(SCHEDULED, SCHEDULED), (COMPLETED, COMPLETED), (CANCELLED, CANCELLED)]


class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default='')
    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime, nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=True, index=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    school_class = db.relationship('SchoolClass', backref='events')
    room = db.relationship('Room', backref='events')

    def __repr__(self):
        return f"<Event {self.title}>"

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'start_time': iso(self.start_time),
            'end_time': iso(self.end_time),
            'class_id': self.class_id,
            'class': self.school_class.name if self.school_class else None,
            'room_id': self.room_id,
            'room': self.room.name if self.room else None,
        }


class Announcement(db.Model):
    __tablename__ = 'announcements'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default='')
    date = db.Column(db.DateTime, nullable=False, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    school_class = db.relationship('SchoolClass', backref='announcements')

    def __repr__(self):
        return f"<Announcement {self.title}>"

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': iso(self.date),
            'class_id': self.class_id,
            'class': self.school_class.name if self.school_class else None,
        }


class ParentMeeting(db.Model):
    __tablename__ = 'parent_meetings'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    meeting_date = db.Column(db.DateTime, nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=MeetingStatus.SCHEDULED)
    feedback = db.Column(db.Text, nullable=True)
    parent_id = db.Column(db.String(36), db.ForeignKey('parents.id'), nullable=False, index=True)
    teacher_id = db.Column(db.String(36), db.ForeignKey('teachers.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    parent = db.relationship('Parent', backref='meetings')
    teacher = db.relationship('Teacher', backref='parent_meetings')

    def __repr__(self):
        return f"<ParentMeeting {self.title} {self.status}>"

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'meeting_date': iso(self.meeting_date),
            'status': self.status,
            'feedback': self.feedback,
            'parent_id': self.parent_id,
            'parent': self.parent.get_full_name() if self.parent else None,
            'teacher_id': self.teacher_id,
            'teacher': self.teacher.get_full_name() if self.teacher else None,
        }
