from flask_wtf import FlaskForm
from wtforms import BooleanField, DateTimeField, IntegerField, StringField, ValidationError
from wtforms.validators import DataRequired, InputRequired

from models import AcademicYear
from .base import DATETIME_FORMATS, RecordExists


class PeriodForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Name is required!')])
    start_date = DateTimeField('Start Date', format=DATETIME_FORMATS,
                               validators=[DataRequired(message='Start date is required!')])
    end_date = DateTimeField('End Date', format=DATETIME_FORMATS,
                             validators=[DataRequired(message='End date is required!')])

    def validate_end_date(self, field):
        if self.start_date.data and field.data and field.data < self.start_date.data:
            raise ValidationError('End date must be after the start date')


class AcademicYearForm(PeriodForm):
    is_current = BooleanField('Current Academic Year', default=False)


class TermForm(PeriodForm):
    academic_year_id = IntegerField('Academic Year', validators=[
        InputRequired(message='Academic year is required!'), RecordExists(AcademicYear)])
