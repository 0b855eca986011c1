from datetime import datetime

from flask import Blueprint, jsonify, session

from entities import BY_KEY
from models import (Admin, Announcement, Event, Lesson, Parent, ParentMeeting, Student, Teacher,
                    UserRoles, db)
from utils.context import login_required
from utils.settings import SystemSettings

user_bp = Blueprint('user', __name__)

UPCOMING_LIMIT = 5


def _scoped(entity_key, ctx):
    return BY_KEY[entity_key].scoped_query(ctx)


def _event_row(event):
    data = event.to_dict()
    data['starts'] = SystemSettings.format_datetime(event.start_time)
    return data


def admin_dashboard(ctx):
    return {
        'counts': {
            'admins': Admin.query.count(),
            'teachers': Teacher.query.count(),
            'students': Student.query.count(),
            'parents': Parent.query.count(),
        },
    }


def teacher_dashboard(ctx):
    lessons = Lesson.query.filter_by(teacher_id=ctx.user_id).order_by(Lesson.start_time).all()
    events = (
        _scoped('event', ctx)
        .filter(Event.start_time >= datetime.utcnow())
        .order_by(Event.start_time)
        .limit(UPCOMING_LIMIT)
        .all()
    )
    return {
        'lessons': [lesson.to_dict() for lesson in lessons],
        'events': [_event_row(event) for event in events],
    }


def student_dashboard(ctx):
    student = db.session.get(Student, ctx.user_id)
    if student is None:
        return None
    announcements = (
        _scoped('announcement', ctx)
        .order_by(Announcement.date.desc())
        .limit(UPCOMING_LIMIT)
        .all()
    )
    return {
        'profile': student.to_dict(),
        'announcements': [announcement.to_dict() for announcement in announcements],
    }


def parent_dashboard(ctx):
    parent = db.session.get(Parent, ctx.user_id)
    if parent is None:
        return None
    meetings = (
        ParentMeeting.query
        .filter(ParentMeeting.parent_id == ctx.user_id,
                ParentMeeting.meeting_date >= datetime.utcnow())
        .order_by(ParentMeeting.meeting_date)
        .limit(UPCOMING_LIMIT)
        .all()
    )
    return {
        'children': [child.to_dict() for child in parent.students],
        'meetings': [meeting.to_dict() for meeting in meetings],
    }


DASHBOARDS = {
    UserRoles.ADMIN: admin_dashboard,
    UserRoles.TEACHER: teacher_dashboard,
    UserRoles.STUDENT: student_dashboard,
    UserRoles.PARENT: parent_dashboard,
}


@user_bp.route('/dashboard')
@login_required
def dashboard(ctx):
    data = DASHBOARDS[ctx.role](ctx)
    if data is None:
        # signed in as someone with no profile row
        return jsonify({'success': False, 'message': 'Profile not found'}), 404
    data.update({
        'success': True,
        'role': ctx.role,
        'school_name': SystemSettings.get_school_name(),
    })
    return jsonify(data)


@user_bp.route('/me')
@login_required
def me(ctx):
    return jsonify({'success': True, **ctx.to_dict()})


@user_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    session.clear()
    return jsonify({'success': True, 'message': 'Logged out'})
