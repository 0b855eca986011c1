from .base import RecordExists, form_defaults, request_formdata
from .people import AdminForm, TeacherForm, StudentForm, ParentForm
from .academics import (DepartmentForm, GradeForm, SubjectForm, ClassForm, SectionForm,
                        CurriculumForm, SyllabusForm, LessonForm, RoomForm)
from .calendar import AcademicYearForm, TermForm
from .assessment import ExamTypeForm, ExamForm, AssignmentForm, ResultForm, ReportCardForm, AttendanceForm
from .communication import EventForm, AnnouncementForm, ParentMeetingForm
from .finance import FeeStructureForm, FeePaymentForm, PayrollForm, ExpenseForm, BudgetForm

__all__ = ['RecordExists', 'form_defaults', 'request_formdata',
           'AdminForm', 'TeacherForm', 'StudentForm', 'ParentForm',
           'DepartmentForm', 'GradeForm', 'SubjectForm', 'ClassForm', 'SectionForm',
           'CurriculumForm', 'SyllabusForm', 'LessonForm', 'RoomForm',
           'AcademicYearForm', 'TermForm',
           'ExamTypeForm', 'ExamForm', 'AssignmentForm', 'ResultForm', 'ReportCardForm', 'AttendanceForm',
           'EventForm', 'AnnouncementForm', 'ParentMeetingForm',
           'FeeStructureForm', 'FeePaymentForm', 'PayrollForm', 'ExpenseForm', 'BudgetForm']
