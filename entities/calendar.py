from models import AcademicYear, Exam, ReportCard, Term
from forms import AcademicYearForm, TermForm
from utils.list_query import ListSpec, eq, ilike
from . import options
from .base import EntityConfig


def academic_year_has_terms(record):
    if Term.query.filter_by(academic_year_id=record.id).first() is not None:
        return "Cannot delete academic year with associated terms"
    return None


def term_has_assessments(record):
    has_exams = Exam.query.filter_by(term_id=record.id).first() is not None
    has_report_cards = ReportCard.query.filter_by(term_id=record.id).first() is not None
    if has_exams or has_report_cards:
        return "Cannot delete term with associated exams or report cards"
    return None


def clear_other_current_years(record):
    """Only one academic year can be current"""
    if not record.is_current:
        return
    (AcademicYear.query
        .filter(AcademicYear.id != record.id, AcademicYear.is_current.is_(True))
        .update({'is_current': False}, synchronize_session='fetch'))


academic_year = EntityConfig(
    'academic_year', 'academic-years', AcademicYear, AcademicYearForm,
    ListSpec(
        AcademicYear,
        search=[ilike(AcademicYear.name)],
        order_by=[AcademicYear.start_date.desc()],
    ),
    guards=[academic_year_has_terms],
    after_save=clear_other_current_years,
)

term = EntityConfig(
    'term', 'terms', Term, TermForm,
    ListSpec(
        Term,
        filters={'academicYearId': eq(Term.academic_year_id)},
        search=[ilike(Term.name), ilike(AcademicYear.name, Term.academic_year)],
        order_by=[Term.start_date.desc()],
    ),
    related={'academic_years': options.academic_years},
    guards=[term_has_assessments],
)

ENTITIES = [academic_year, term]
