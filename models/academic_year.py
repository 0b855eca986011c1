from datetime import datetime

from . import db, iso


class AcademicYear(db.Model):
    """Academic year period; at most one is flagged as current"""

    __tablename__ = 'academic_years'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), nullable=False, unique=True)  # e.g. '2025/26'
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    is_current = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<AcademicYear {self.name}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'start_date': iso(self.start_date),
            'end_date': iso(self.end_date),
            'is_current': self.is_current,
            'terms': len(self.terms),
        }


class Term(db.Model):
    """Academic term inside an academic year"""

    __tablename__ = 'terms'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_years.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    academic_year = db.relationship('AcademicYear', backref='terms')

    def __repr__(self):
        return f"<Term {self.name}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'start_date': iso(self.start_date),
            'end_date': iso(self.end_date),
            'academic_year_id': self.academic_year_id,
            'academic_year': self.academic_year.name if self.academic_year else None,
        }
