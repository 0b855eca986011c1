from datetime import datetime

from models import Budget, Expense, FeePayment, FeeStructure, Payroll, Student, Teacher, UserRoles
from forms import BudgetForm, ExpenseForm, FeePaymentForm, FeeStructureForm, PayrollForm
from utils.derived import net_salary
from utils.list_query import ListSpec, eq, ilike, max_value, min_value
from utils.settings import SystemSettings
from . import options, scopes
from .base import EntityConfig

ADMIN = UserRoles.ADMIN
TEACHER = UserRoles.TEACHER
STUDENT = UserRoles.STUDENT
PARENT = UserRoles.PARENT


def with_currency(*fields):
    """Serializer adding ``<field>_display`` strings in the school's currency"""
    def serialize(record):
        data = record.to_dict()
        for field in fields:
            data[f"{field}_display"] = SystemSettings.format_currency(data.get(field))
        return data
    return serialize


def apply_net_salary(record):
    record.net_salary = net_salary(record.amount, record.tax_amount, record.bonus_amount)


def default_payment_date(record):
    if record.payment_date is None:
        record.payment_date = datetime.utcnow()


fee_structure = EntityConfig(
    'fee_structure', 'fee-structures', FeeStructure, FeeStructureForm,
    ListSpec(
        FeeStructure,
        filters={
            'gradeId': eq(FeeStructure.grade_id),
            'feeType': eq(FeeStructure.fee_type, str),
            'academicYear': eq(FeeStructure.academic_year, str),
        },
        search=[
            ilike(FeeStructure.name),
            ilike(FeeStructure.description),
            ilike(FeeStructure.fee_type),
            ilike(FeeStructure.academic_year),
        ],
        scopes={STUDENT: scopes.everyone, PARENT: scopes.everyone},
        order_by=[FeeStructure.name],
    ),
    related={'grades': options.grades, 'academic_years': options.latest_academic_year},
    list_roles=(ADMIN, STUDENT, PARENT),
    serialize=with_currency('amount'),
)

fee_payment = EntityConfig(
    'fee_payment', 'fee-payments', FeePayment, FeePaymentForm,
    ListSpec(
        FeePayment,
        filters={
            'studentId': eq(FeePayment.student_id, str),
            'feeStructureId': eq(FeePayment.fee_structure_id),
            'status': eq(FeePayment.status, str),
        },
        search=[
            ilike(FeePayment.receipt_number),
            ilike(FeePayment.transaction_id),
            ilike(Student.name, FeePayment.student),
            ilike(Student.surname, FeePayment.student),
        ],
        scopes={
            STUDENT: scopes.own(FeePayment.student_id),
            PARENT: scopes.children(FeePayment.student),
        },
        order_by=[FeePayment.payment_date.desc()],
    ),
    related={'students': options.students, 'fee_structures': options.fee_structures},
    list_roles=(ADMIN, STUDENT, PARENT),
    before_save=default_payment_date,
    serialize=with_currency('amount'),
)

payroll = EntityConfig(
    'payroll', 'payroll', Payroll, PayrollForm,
    ListSpec(
        Payroll,
        filters={
            'teacherId': eq(Payroll.teacher_id, str),
            'month': eq(Payroll.month),
            'year': eq(Payroll.year),
        },
        search=[ilike(Teacher.name, Payroll.teacher), ilike(Teacher.surname, Payroll.teacher)],
        scopes={TEACHER: scopes.own(Payroll.teacher_id)},
        order_by=[Payroll.year.desc(), Payroll.month.desc()],
    ),
    related={'teachers': options.active_teachers},
    list_roles=(ADMIN, TEACHER),
    before_save=apply_net_salary,
    serialize=with_currency('amount', 'net_salary'),
)

expense = EntityConfig(
    'expense', 'expenses', Expense, ExpenseForm,
    ListSpec(
        Expense,
        filters={
            'category': eq(Expense.category, str),
            'minAmount': min_value(Expense.amount),
            'maxAmount': max_value(Expense.amount),
        },
        search=[ilike(Expense.title), ilike(Expense.description), ilike(Expense.category)],
        order_by=[Expense.date.desc()],
    ),
    serialize=with_currency('amount'),
)

budget = EntityConfig(
    'budget', 'budgets', Budget, BudgetForm,
    ListSpec(
        Budget,
        filters={'category': eq(Budget.category, str)},
        search=[ilike(Budget.title), ilike(Budget.category)],
        order_by=[Budget.allocated_date.desc()],
    ),
    serialize=with_currency('total_amount', 'utilized_amount', 'remaining_amount'),
)

ENTITIES = [fee_structure, fee_payment, payroll, expense, budget]
