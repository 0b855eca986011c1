from flask_wtf import FlaskForm
from wtforms import BooleanField, DateTimeField, FloatField, IntegerField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from models import Assignment, Exam, ExamType, Lesson, ReportCard, Student, Term
from .base import DATETIME_FORMATS, RecordExists, blank_to_none, default_if_none


class ExamTypeForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Name is required!')])
    total = IntegerField('Total Marks', validators=[InputRequired(message='Total marks are required!'),
                                                    NumberRange(min=1, message='Total marks are required!')])
    has_practical = BooleanField('Has Practical', default=False)


class ExamForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    start_time = DateTimeField('Start Time', format=DATETIME_FORMATS,
                               validators=[DataRequired(message='Start time is required!')])
    end_time = DateTimeField('End Time', format=DATETIME_FORMATS,
                             validators=[DataRequired(message='End time is required!')])
    lesson_id = IntegerField('Lesson', validators=[InputRequired(message='Lesson is required!'),
                                                   RecordExists(Lesson)])
    total_marks = FloatField('Total Marks', default=100, filters=[default_if_none(100)],
                             validators=[Optional(), NumberRange(min=0)])
    passing_marks = FloatField('Passing Marks', default=35, filters=[default_if_none(35)],
                               validators=[Optional(), NumberRange(min=0)])
    has_grading = BooleanField('Has Grading', default=False)
    exam_type_id = IntegerField('Exam Type', validators=[Optional(), RecordExists(ExamType)])
    term_id = IntegerField('Term', validators=[Optional(), RecordExists(Term)])


class AssignmentForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    start_date = DateTimeField('Start Date', format=DATETIME_FORMATS,
                               validators=[DataRequired(message='Start date is required!')])
    due_date = DateTimeField('Due Date', format=DATETIME_FORMATS,
                             validators=[DataRequired(message='Due date is required!')])
    total_marks = FloatField('Total Marks', default=50, filters=[default_if_none(50)],
                             validators=[Optional(), NumberRange(min=0)])
    lesson_id = IntegerField('Lesson', validators=[InputRequired(message='Lesson is required!'),
                                                   RecordExists(Lesson)])


class ResultForm(FlaskForm):
    """Total, pass flag and (for graded exams) grade are computed on save"""

    score = FloatField('Score', validators=[InputRequired(message='Score is required!'), NumberRange(min=0)])
    practical_score = FloatField('Practical Score', validators=[Optional(), NumberRange(min=0)])
    grade = StringField('Grade', filters=[blank_to_none], validators=[Optional()])
    feedback_comments = TextAreaField('Feedback', filters=[blank_to_none], validators=[Optional()])
    exam_id = IntegerField('Exam', validators=[Optional(), RecordExists(Exam)])
    assignment_id = IntegerField('Assignment', validators=[Optional(), RecordExists(Assignment)])
    student_id = StringField('Student', validators=[DataRequired(message='Student is required!'),
                                                    RecordExists(Student)])
    report_card_id = IntegerField('Report Card', validators=[Optional(), RecordExists(ReportCard)])

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators):
            return False
        if self.exam_id.data is None and self.assignment_id.data is None:
            self.exam_id.errors.append('Select an exam or an assignment')
            return False
        return True


class ReportCardForm(FlaskForm):
    """The letter grade is computed from the percentage on save"""

    total_marks = FloatField('Total Marks', validators=[InputRequired(), NumberRange(min=0)])
    percentage = FloatField('Percentage', validators=[InputRequired(), NumberRange(min=0, max=100)])
    remarks = TextAreaField('Remarks', filters=[blank_to_none], validators=[Optional()])
    issue_date = DateTimeField('Issue Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    student_id = StringField('Student', validators=[DataRequired(message='Student is required!'),
                                                    RecordExists(Student)])
    term_id = IntegerField('Term', validators=[InputRequired(message='Term is required!'), RecordExists(Term)])


class AttendanceForm(FlaskForm):
    date = DateTimeField('Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    present = BooleanField('Present', default=False)
    student_id = StringField('Student', validators=[DataRequired(message='Student is required!'),
                                                    RecordExists(Student)])
    lesson_id = IntegerField('Lesson', validators=[InputRequired(message='Lesson is required!'),
                                                   RecordExists(Lesson)])
