from datetime import datetime

from flask_wtf import FlaskForm
from wtforms import DateTimeField, FloatField, IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from models import (BudgetCategories, ExpenseCategories, FeeStructure, FeeTypes, Grade,
                    PaymentMethods, PaymentStatuses, Student, Teacher)
from .base import DATETIME_FORMATS, RecordExists, blank_to_none, default_if_none


class FeeStructureForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(message='Name is required!')])
    amount = FloatField('Amount', validators=[InputRequired(), NumberRange(min=0)])
    description = TextAreaField('Description', filters=[blank_to_none], validators=[Optional()])
    due_date = DateTimeField('Due Date', format=DATETIME_FORMATS, validators=[Optional()])
    fee_type = SelectField('Fee Type', choices=FeeTypes.CHOICES, default='TUITION')
    academic_year = StringField('Academic Year', filters=[blank_to_none], validators=[Optional()])
    grade_id = IntegerField('Grade', validators=[Optional(), RecordExists(Grade)])


class FeePaymentForm(FlaskForm):
    amount = FloatField('Amount', validators=[InputRequired(), NumberRange(min=0)])
    payment_date = DateTimeField('Payment Date', format=DATETIME_FORMATS, default=datetime.utcnow,
                                 validators=[Optional()])
    payment_method = SelectField('Payment Method', choices=PaymentMethods.CHOICES, default='CASH')
    transaction_id = StringField('Transaction ID', filters=[blank_to_none], validators=[Optional()])
    status = SelectField('Status', choices=PaymentStatuses.CHOICES, default='PAID')
    student_id = StringField('Student', validators=[DataRequired(message='Student is required!'),
                                                    RecordExists(Student)])
    fee_structure_id = IntegerField('Fee Structure', validators=[
        InputRequired(message='Fee structure is required!'), RecordExists(FeeStructure)])
    receipt_number = StringField('Receipt Number', filters=[blank_to_none], validators=[Optional()])


class PayrollForm(FlaskForm):
    """Net salary is computed on save from amount, tax and bonus"""

    amount = FloatField('Amount', validators=[InputRequired(), NumberRange(min=0)])
    pay_date = DateTimeField('Pay Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    teacher_id = StringField('Teacher', validators=[DataRequired(message='Teacher is required!'),
                                                    RecordExists(Teacher)])
    month = IntegerField('Month', validators=[InputRequired(), NumberRange(min=1, max=12)])
    year = IntegerField('Year', validators=[InputRequired()])
    tax_amount = FloatField('Tax', validators=[Optional(), NumberRange(min=0)])
    bonus_amount = FloatField('Bonus', validators=[Optional(), NumberRange(min=0)])


class ExpenseForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    amount = FloatField('Amount', validators=[InputRequired(), NumberRange(min=0)])
    date = DateTimeField('Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    category = SelectField('Category', choices=ExpenseCategories.CHOICES, default='Supplies')
    description = TextAreaField('Description', filters=[blank_to_none], validators=[Optional()])
    receipt = StringField('Receipt', filters=[blank_to_none], validators=[Optional()])
    approved_by = StringField('Approved By', filters=[blank_to_none], validators=[Optional()])


class BudgetForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required!')])
    total_amount = FloatField('Total Amount', validators=[InputRequired(), NumberRange(min=0)])
    allocated_date = DateTimeField('Allocated Date', format=DATETIME_FORMATS, validators=[DataRequired()])
    end_date = DateTimeField('End Date', format=DATETIME_FORMATS, validators=[Optional()])
    description = TextAreaField('Description', filters=[blank_to_none], validators=[Optional()])
    category = SelectField('Category', choices=BudgetCategories.CHOICES, default='Operations')
    utilized_amount = FloatField('Utilized Amount', default=0, filters=[default_if_none(0)],
                                 validators=[Optional(), NumberRange(min=0)])
