from flask_wtf import FlaskForm
from wtforms import (BooleanField, DateTimeField, FloatField, IntegerField, SelectField,
                     SelectMultipleField, StringField, TextAreaField)
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from models import (AcademicYear, Department, Grade, Room, RoomTypes, SchoolClass, Subject,
                    Teacher, Weekdays)
from .base import DATETIME_FORMATS, RecordExists, blank_to_none, default_if_none


class DepartmentForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Department name is required!')])


class GradeForm(FlaskForm):
    level = IntegerField('Level', validators=[InputRequired(message='Grade level is required!'),
                                              NumberRange(min=1, message='Grade level is required!')])


class SubjectForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Subject name is required!')])
    teacher_ids = SelectMultipleField('Teachers', coerce=str, validate_choice=False,
                                      validators=[RecordExists(Teacher)])
    department_id = IntegerField('Department', validators=[Optional(), RecordExists(Department)])


class ClassForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Class name is required!')])
    capacity = IntegerField('Capacity', validators=[InputRequired(message='Capacity is required!'),
                                                    NumberRange(min=1, message='Capacity is required!')])
    grade_id = IntegerField('Grade', validators=[InputRequired(message='Grade is required!'), RecordExists(Grade)])
    supervisor_id = StringField('Supervisor', filters=[blank_to_none],
                                validators=[Optional(), RecordExists(Teacher)])
    academic_year_id = IntegerField('Academic Year', validators=[Optional(), RecordExists(AcademicYear)])


class SectionForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Section name is required!')])
    class_id = IntegerField('Class', validators=[InputRequired(message='Class is required!'),
                                                 RecordExists(SchoolClass)])


class CurriculumForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Name is required!')])
    description = TextAreaField('Description', filters=[blank_to_none], validators=[Optional()])
    grade_id = IntegerField('Grade', validators=[InputRequired(message='Grade is required!'), RecordExists(Grade)])
    academic_year_id = IntegerField('Academic Year', validators=[
        InputRequired(message='Academic year is required!'), RecordExists(AcademicYear)])
    subject_ids = SelectMultipleField('Subjects', coerce=int, validate_choice=False,
                                      validators=[RecordExists(Subject)])


class SyllabusForm(FlaskForm):
    content = TextAreaField('Content', validators=[DataRequired(message='Content is required!')])
    subject_id = IntegerField('Subject', validators=[InputRequired(message='Subject is required!'),
                                                     RecordExists(Subject)])
    description = TextAreaField('Description', filters=[blank_to_none], validators=[Optional()])
    completion = FloatField('Completion (%)', default=0, filters=[default_if_none(0)],
                            validators=[Optional(), NumberRange(min=0, max=100)])


class LessonForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Name is required!')])
    day = SelectField('Day', choices=Weekdays.CHOICES, validators=[DataRequired()])
    start_time = DateTimeField('Start Time', format=DATETIME_FORMATS,
                               validators=[DataRequired(message='Start time is required!')])
    end_time = DateTimeField('End Time', format=DATETIME_FORMATS,
                             validators=[DataRequired(message='End time is required!')])
    subject_id = IntegerField('Subject', validators=[InputRequired(message='Subject is required!'),
                                                     RecordExists(Subject)])
    class_id = IntegerField('Class', validators=[InputRequired(message='Class is required!'),
                                                 RecordExists(SchoolClass)])
    teacher_id = StringField('Teacher', validators=[DataRequired(message='Teacher is required!'),
                                                    RecordExists(Teacher)])
    room_id = IntegerField('Room', validators=[Optional(), RecordExists(Room)])


class RoomForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Name is required!')])
    capacity = IntegerField('Capacity', validators=[InputRequired(), NumberRange(min=1)])
    type = SelectField('Type', choices=RoomTypes.CHOICES, default='Classroom')
    location = StringField('Location', filters=[blank_to_none], validators=[Optional()])
    available = BooleanField('Available', default=True)
    class_ids = SelectMultipleField('Classes', coerce=int, validate_choice=False,
                                    validators=[RecordExists(SchoolClass)])
