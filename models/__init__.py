from sqlalchemy.orm import configure_mappers

from .user import db, iso, UserRoles, UserStatus, Sex, Admin, Teacher, Student, Parent
from .academic_year import AcademicYear, Term
from .school_class import Grade, SchoolClass, Section
from .subject import Department, Subject, Curriculum, Syllabus
from .lesson import Room, Lesson, Weekdays, RoomTypes
from .exam import ExamType, Exam, Assignment, Result, ReportCard
from .attendance import Attendance
from .event import Event, Announcement, ParentMeeting, MeetingStatus
from .finance import (FeeStructure, FeePayment, Payroll, Expense, Budget,
                      FeeTypes, PaymentMethods, PaymentStatuses, ExpenseCategories,
                      BudgetCategories)
from .system_settings import SystemSetting

__all__ = ['db', 'iso', 'UserRoles', 'UserStatus', 'Sex', 'Admin', 'Teacher', 'Student', 'Parent',
           'AcademicYear', 'Term', 'Grade', 'SchoolClass', 'Section', 'Department', 'Subject',
           'Curriculum', 'Syllabus', 'Room', 'Lesson', 'Weekdays', 'RoomTypes', 'ExamType', 'Exam',
           'Assignment', 'Result', 'ReportCard', 'Attendance', 'Event', 'Announcement',
           'ParentMeeting', 'MeetingStatus', 'FeeStructure', 'FeePayment', 'Payroll', 'Expense',
           'Budget', 'FeeTypes', 'PaymentMethods', 'PaymentStatuses', 'ExpenseCategories',
           'BudgetCategories', 'SystemSetting']

# backrefs (Teacher.lessons, Parent.students, ...) only exist once the mappers are configured
configure_mappers()
