from flask_wtf import FlaskForm
from wtforms import DateTimeField, IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, Optional

from models import MeetingStatus, Parent, Room, SchoolClass, Teacher
from .base import DATETIME_FORMATS, RecordExists, blank_to_none, default_if_none


class EventForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    description = TextAreaField('Description', filters=[default_if_none('')])
    start_time = DateTimeField('Start Time', format=DATETIME_FORMATS, validators=[DataRequired()])
    end_time = DateTimeField('End Time', format=DATETIME_FORMATS, validators=[DataRequired()])
    class_id = IntegerField('Class', validators=[Optional(), RecordExists(SchoolClass)])
    room_id = IntegerField('Room', validators=[Optional(), RecordExists(Room)])


class AnnouncementForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    description = TextAreaField('Description', filters=[default_if_none('')])
    date = DateTimeField('Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    class_id = IntegerField('Class', validators=[Optional(), RecordExists(SchoolClass)])


class ParentMeetingForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    description = TextAreaField('Description', filters=[blank_to_none], validators=[Optional()])
    meeting_date = DateTimeField('Meeting Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    status = SelectField('Status', choices=MeetingStatus.CHOICES, default=MeetingStatus.SCHEDULED)
    parent_id = StringField('Parent', validators=[DataRequired(message='Parent is required!'),
                                                  RecordExists(Parent)])
    teacher_id = StringField('Teacher', validators=[DataRequired(message='Teacher is required!'),
                                                    RecordExists(Teacher)])
    feedback = TextAreaField('Feedback', filters=[blank_to_none], validators=[Optional()])
