from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, SelectField, SelectMultipleField, StringField
from wtforms.validators import DataRequired, Email, InputRequired, Length, Optional

from models import (AcademicYear, Department, Grade, Parent, SchoolClass, Section, Sex, Student,
                    Subject, UserStatus)
from .base import DATE_FORMATS, RecordExists, blank_to_none


class PersonForm(FlaskForm):
    """Fields shared by admins, teachers, students and parents"""

    username = StringField('Username', validators=[
        DataRequired(message='Username is required!'),
        Length(min=3, max=20, message='Username must be between 3 and 20 characters long!'),
    ])
    name = StringField('First Name', validators=[DataRequired(message='First name is required!')])
    surname = StringField('Last Name', validators=[DataRequired(message='Last name is required!')])
    email = StringField('Email', filters=[blank_to_none],
                        validators=[Optional(), Email(message='Invalid email address!')])
    phone = StringField('Phone', filters=[blank_to_none], validators=[Optional()])
    address = StringField('Address', filters=[blank_to_none], validators=[Optional()])
    status = SelectField('Status', choices=UserStatus.CHOICES, default=UserStatus.ACTIVE)


class AdminForm(PersonForm):
    img = StringField('Photo', filters=[blank_to_none], validators=[Optional()])


class ProfileMixin:
    img = StringField('Photo', filters=[blank_to_none], validators=[Optional()])
    blood_type = StringField('Blood Type', validators=[DataRequired(message='Blood Type is required!')])
    birthday = DateField('Birthday', format=DATE_FORMATS,
                         validators=[DataRequired(message='Birthday is required!')])
    sex = SelectField('Sex', choices=Sex.CHOICES, validators=[DataRequired(message='Sex is required!')])


class TeacherForm(ProfileMixin, PersonForm):
    address = StringField('Address', validators=[DataRequired(message='Address is required!')])
    subject_ids = SelectMultipleField('Subjects', coerce=int, validate_choice=False,
                                      validators=[RecordExists(Subject)])
    department_id = IntegerField('Department', validators=[Optional(), RecordExists(Department)])
    academic_year_id = IntegerField('Academic Year', validators=[Optional(), RecordExists(AcademicYear)])


class StudentForm(ProfileMixin, PersonForm):
    address = StringField('Address', validators=[DataRequired(message='Address is required!')])
    grade_id = IntegerField('Grade', validators=[InputRequired(message='Grade is required!'), RecordExists(Grade)])
    class_id = IntegerField('Class', validators=[InputRequired(message='Class is required!'),
                                                 RecordExists(SchoolClass)])
    parent_id = StringField('Parent', validators=[DataRequired(message='Parent Id is required!'),
                                                  RecordExists(Parent)])
    section_id = IntegerField('Section', validators=[Optional(), RecordExists(Section)])


class ParentForm(PersonForm):
    phone = StringField('Phone', validators=[DataRequired(message='Phone is required!')])
    address = StringField('Address', validators=[DataRequired(message='Address is required!')])
    student_ids = SelectMultipleField('Students', coerce=str, validate_choice=False,
                                      validators=[RecordExists(Student)])
