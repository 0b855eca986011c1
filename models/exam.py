from datetime import datetime

from . import db, iso


class ExamType(db.Model):
    __tablename__ = 'exam_types'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    total = db.Column(db.Integer, nullable=False)
    has_practical = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<ExamType {self.name}>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'total': self.total,
            'has_practical': self.has_practical,
        }


class Exam(db.Model):
    __tablename__ = 'exams'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime, nullable=False)
    total_marks = db.Column(db.Float, nullable=False, default=100)
    passing_marks = db.Column(db.Float, nullable=False, default=35)
    has_grading = db.Column(db.Boolean, nullable=False, default=False)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lessons.id'), nullable=False, index=True)
    exam_type_id = db.Column(db.Integer, db.ForeignKey('exam_types.id'), nullable=True, index=True)
    term_id = db.Column(db.Integer, db.ForeignKey('terms.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    lesson = db.relationship('Lesson', backref='exams')
    exam_type = db.relationship('ExamType', backref='exams')
    term = db.relationship('Term', backref='exams')

    def __repr__(self):
        return f"<Exam {self.title}>"

    def to_dict(self):
        lesson = self.lesson
        return {
            'id': self.id,
            'title': self.title,
            'start_time': iso(self.start_time),
            'end_time': iso(self.end_time),
            'total_marks': self.total_marks,
            'passing_marks': self.passing_marks,
            'has_grading': self.has_grading,
            'lesson_id': self.lesson_id,
            'subject': lesson.subject.name if lesson and lesson.subject else None,
            'class': lesson.school_class.name if lesson and lesson.school_class else None,
            'teacher': lesson.teacher.get_full_name() if lesson and lesson.teacher else None,
            'exam_type_id': self.exam_type_id,
            'exam_type': self.exam_type.name if self.exam_type else None,
            'term_id': self.term_id,
            'term': self.term.name if self.term else None,
        }


class Assignment(db.Model):
    __tablename__ = 'assignments'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    start_date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False, index=True)
    total_marks = db.Column(db.Float, nullable=False, default=50)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lessons.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    lesson = db.relationship('Lesson', backref='assignments')

    def __repr__(self):
        return f"<Assignment {self.title}>"

    def to_dict(self):
        lesson = self.lesson
        return {
            'id': self.id,
            'title': self.title,
            'start_date': iso(self.start_date),
            'due_date': iso(self.due_date),
            'total_marks': self.total_marks,
            'lesson_id': self.lesson_id,
            'subject': lesson.subject.name if lesson and lesson.subject else None,
            'class': lesson.school_class.name if lesson and lesson.school_class else None,
            'teacher': lesson.teacher.get_full_name() if lesson and lesson.teacher else None,
        }


class ReportCard(db.Model):
    __tablename__ = 'report_cards'

    id = db.Column(db.Integer, primary_key=True)
    total_marks = db.Column(db.Float, nullable=False)
    percentage = db.Column(db.Float, nullable=False)
    grade = db.Column(db.String(5), nullable=False)
    remarks = db.Column(db.Text, nullable=True)
    issue_date = db.Column(db.DateTime, nullable=False)
    student_id = db.Column(db.String(36), db.ForeignKey('students.id'), nullable=False, index=True)
    term_id = db.Column(db.Integer, db.ForeignKey('terms.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    student = db.relationship('Student', backref='report_cards')
    term = db.relationship('Term', backref='report_cards')

    def __repr__(self):
        return f"<ReportCard {self.student_id} term {self.term_id}: {self.grade}>"

    def to_dict(self):
        return {
            'id': self.id,
            'total_marks': self.total_marks,
            'percentage': self.percentage,
            'grade': self.grade,
            'remarks': self.remarks,
            'issue_date': iso(self.issue_date),
            'student_id': self.student_id,
            'student': self.student.get_full_name() if self.student else None,
            'term_id': self.term_id,
            'term': self.term.name if self.term else None,
        }


class Result(db.Model):
    """Marks for one student on either an exam or an assignment"""

    __tablename__ = 'results'

    id = db.Column(db.Integer, primary_key=True)
    score = db.Column(db.Float, nullable=False)
    practical_score = db.Column(db.Float, nullable=True)
    total_obtained = db.Column(db.Float, nullable=False, default=0)
    grade = db.Column(db.String(5), nullable=True)
    is_passed = db.Column(db.Boolean, nullable=False, default=False)
    feedback_comments = db.Column(db.Text, nullable=True)
    exam_id = db.Column(db.Integer, db.ForeignKey('exams.id'), nullable=True, index=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignments.id'), nullable=True, index=True)
    student_id = db.Column(db.String(36), db.ForeignKey('students.id'), nullable=False, index=True)
    report_card_id = db.Column(db.Integer, db.ForeignKey('report_cards.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    exam = db.relationship('Exam', backref='results')
    assignment = db.relationship('Assignment', backref='results')
    student = db.relationship('Student', backref='results')
    report_card = db.relationship('ReportCard', backref='results')

    def __repr__(self):
        return f"<Result {self.student_id}: {self.total_obtained}>"

    @property
    def assessment(self):
        return self.exam or self.assignment

    def to_dict(self):
        assessment = self.assessment
        lesson = assessment.lesson if assessment else None
        return {
            'id': self.id,
            'score': self.score,
            'practical_score': self.practical_score,
            'total_obtained': self.total_obtained,
            'grade': self.grade,
            'is_passed': self.is_passed,
            'feedback_comments': self.feedback_comments,
            'exam_id': self.exam_id,
            'assignment_id': self.assignment_id,
            'title': assessment.title if assessment else None,
            'student_id': self.student_id,
            'student': self.student.get_full_name() if self.student else None,
            'teacher': lesson.teacher.get_full_name() if lesson and lesson.teacher else None,
            'class': lesson.school_class.name if lesson and lesson.school_class else None,
            'report_card_id': self.report_card_id,
        }
