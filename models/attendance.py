from datetime import datetime
from . import db, iso


class Attendance(db.Model):
    """Attendance of one student at one lesson on one day"""

    __tablename__ = 'attendance'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.DateTime, nullable=False, index=True)
    present = db.Column(db.Boolean, nullable=False, default=False)
    student_id = db.Column(db.String(36), db.ForeignKey('students.id'), nullable=False, index=True)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lessons.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    student = db.relationship('Student', backref='attendance_records')
    lesson = db.relationship('Lesson', backref='attendance_records')

    def __repr__(self):
        status = 'present' if self.present else 'absent'
        return f"<Attendance {self.student_id} on {self.date}: {status}>"

    def to_dict(self):
        return {
            'id': self.id,
            'date': iso(self.date),
            'present': self.present,
            'student_id': self.student_id,
            'student': self.student.get_full_name() if self.student else None,
            'lesson_id': self.lesson_id,
            'lesson': self.lesson.name if self.lesson else None,
        }
