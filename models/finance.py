from models import db, iso
from datetime import datetime


class FeeTypes:
    """Fee categories like tuition, transport, library, etc."""
    ALL = ['TUITION', 'TRANSPORT', 'LIBRARY', 'LABORATORY', 'SPORTS', 'EXAMINATION', 'OTHER']
    CHOICES = [(t, t.capitalize()) for t in ALL]


class PaymentMethods:
    ALL = ['CASH', 'BANK_TRANSFER', 'CARD', 'MOBILE_MONEY', 'CHEQUE']
    CHOICES = [(m, m.replace('_', ' ').title()) for m in ALL]


class PaymentStatuses:
    ALL = ['PAID', 'PENDING', 'PARTIAL', 'FAILED', 'REFUNDED']
    CHOICES = [(s, s.capitalize()) for s in ALL]


class ExpenseCategories:
    ALL = ['Supplies', 'Maintenance', 'Utilities', 'Salary', 'Transportation',
           'Events', 'Equipment', 'Software', 'Other']
    CHOICES = [(c, c) for c in ALL]


class BudgetCategories:
    ALL = ['Operations', 'Infrastructure', 'Academics', 'Transportation', 'Technology',
           'Events', 'Staff', 'Maintenance', 'Other']
    CHOICES = [(c, c) for c in ALL]


class FeeStructure(db.Model):
    """Fee structure defining an amount per fee type, optionally per grade"""
    __tablename__ = 'fee_structures'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False, default=0.0)
    description = db.Column(db.Text, nullable=True)
    due_date = db.Column(db.DateTime, nullable=True)
    fee_type = db.Column(db.String(30), nullable=False, default='TUITION', index=True)
    academic_year = db.Column(db.String(32), nullable=True, index=True)  # academic year name
    grade_id = db.Column(db.Integer, db.ForeignKey('grades.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    grade = db.relationship('Grade', backref='fee_structures')

    def __repr__(self):
        return f'<FeeStructure {self.name} - {self.fee_type}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'amount': self.amount,
            'description': self.description,
            'due_date': iso(self.due_date),
            'fee_type': self.fee_type,
            'academic_year': self.academic_year,
            'grade_id': self.grade_id,
            'grade': self.grade.level if self.grade else None,
        }


class FeePayment(db.Model):
    """Payment records"""
    __tablename__ = 'fee_payments'

    id = db.Column(db.Integer, primary_key=True)
    amount = db.Column(db.Float, nullable=False)
    payment_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    payment_method = db.Column(db.String(30), nullable=False, default='CASH')
    transaction_id = db.Column(db.String(100), nullable=True)
    status = db.Column(db.String(20), nullable=False, default='PAID', index=True)
    receipt_number = db.Column(db.String(50), unique=True, nullable=True)
    student_id = db.Column(db.String(36), db.ForeignKey('students.id'), nullable=False, index=True)
    fee_structure_id = db.Column(db.Integer, db.ForeignKey('fee_structures.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    student = db.relationship('Student', backref='fee_payments')
    fee_structure = db.relationship('FeeStructure', backref='payments')

    def __repr__(self):
        return f'<FeePayment {self.student_id} - {self.amount}>'

    def to_dict(self):
        return {
            'id': self.id,
            'amount': self.amount,
            'payment_date': iso(self.payment_date),
            'payment_method': self.payment_method,
            'transaction_id': self.transaction_id,
            'status': self.status,
            'receipt_number': self.receipt_number,
            'student_id': self.student_id,
            'student': self.student.get_full_name() if self.student else None,
            'fee_structure_id': self.fee_structure_id,
            'fee_structure': self.fee_structure.name if self.fee_structure else None,
        }


class Payroll(db.Model):
    """Monthly salary record of a teacher; net_salary is always derived"""
    __tablename__ = 'payrolls'

    id = db.Column(db.Integer, primary_key=True)
    amount = db.Column(db.Float, nullable=False)
    pay_date = db.Column(db.DateTime, nullable=False)
    month = db.Column(db.Integer, nullable=False, index=True)
    year = db.Column(db.Integer, nullable=False, index=True)
    tax_amount = db.Column(db.Float, nullable=True)
    bonus_amount = db.Column(db.Float, nullable=True)
    net_salary = db.Column(db.Float, nullable=False, default=0.0)
    teacher_id = db.Column(db.String(36), db.ForeignKey('teachers.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    teacher = db.relationship('Teacher', backref='payrolls')

    def __repr__(self):
        return f'<Payroll {self.teacher_id} {self.month}/{self.year}>'

    def to_dict(self):
        return {
            'id': self.id,
            'amount': self.amount,
            'pay_date': iso(self.pay_date),
            'month': self.month,
            'year': self.year,
            'tax_amount': self.tax_amount,
            'bonus_amount': self.bonus_amount,
            'net_salary': self.net_salary,
            'teacher_id': self.teacher_id,
            'teacher': self.teacher.get_full_name() if self.teacher else None,
        }


class Expense(db.Model):
    __tablename__ = 'expenses'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, nullable=False, index=True)
    category = db.Column(db.String(50), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    receipt = db.Column(db.String(255), nullable=True)
    approved_by = db.Column(db.String(120), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Expense {self.title} - {self.amount}>'

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'amount': self.amount,
            'date': iso(self.date),
            'category': self.category,
            'description': self.description,
            'receipt': self.receipt,
            'approved_by': self.approved_by,
        }


class Budget(db.Model):
    __tablename__ = 'budgets'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    total_amount = db.Column(db.Float, nullable=False)
    utilized_amount = db.Column(db.Float, nullable=False, default=0.0)
    allocated_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=True)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(50), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<Budget {self.title}>'

    @property
    def utilization_percentage(self):
        """Share of the total already used, rounded half up; 0 for an empty budget"""
        if not self.total_amount or self.total_amount <= 0:
            return 0
        return int((self.utilized_amount or 0) / self.total_amount * 100 + 0.5)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'total_amount': self.total_amount,
            'utilized_amount': self.utilized_amount,
            'utilization_percentage': self.utilization_percentage,
            'remaining_amount': (self.total_amount or 0) - (self.utilized_amount or 0),
            'allocated_date': iso(self.allocated_date),
            'end_date': iso(self.end_date),
            'description': self.description,
            'category': self.category,
        }
