from models import Announcement, Event, ParentMeeting, Room, SchoolClass, UserRoles
from forms import AnnouncementForm, EventForm, ParentMeetingForm
from utils.list_query import ListSpec, eq, ilike
from . import options, scopes
from .base import EntityConfig

ADMIN = UserRoles.ADMIN
TEACHER = UserRoles.TEACHER
STUDENT = UserRoles.STUDENT
PARENT = UserRoles.PARENT
EVERY_ROLE = (ADMIN, TEACHER, STUDENT, PARENT)


def class_scopes(model):
    """School-wide rows plus rows for a class the caller is tied to"""
    return {
        TEACHER: scopes.class_or_schoolwide(model.class_id, model.school_class, scopes.classes_taught),
        STUDENT: scopes.class_or_schoolwide(model.class_id, model.school_class, scopes.classes_attended),
        PARENT: scopes.class_or_schoolwide(model.class_id, model.school_class, scopes.classes_of_children),
    }


event = EntityConfig(
    'event', 'events', Event, EventForm,
    ListSpec(
        Event,
        filters={'classId': eq(Event.class_id)},
        search=[
            ilike(Event.title),
            ilike(Event.description),
            ilike(SchoolClass.name, Event.school_class),
            ilike(Room.name, Event.room),
        ],
        scopes=class_scopes(Event),
        order_by=[Event.start_time],
    ),
    related={'classes': options.classes, 'rooms': options.available_rooms},
    list_roles=EVERY_ROLE,
)

announcement = EntityConfig(
    'announcement', 'announcements', Announcement, AnnouncementForm,
    ListSpec(
        Announcement,
        filters={'classId': eq(Announcement.class_id)},
        search=[ilike(Announcement.title), ilike(Announcement.description)],
        scopes=class_scopes(Announcement),
        order_by=[Announcement.date.desc()],
    ),
    related={'classes': options.classes},
    list_roles=EVERY_ROLE,
)

parent_meeting = EntityConfig(
    'parent_meeting', 'parent-meetings', ParentMeeting, ParentMeetingForm,
    ListSpec(
        ParentMeeting,
        filters={'status': eq(ParentMeeting.status, str)},
        search=[ilike(ParentMeeting.title), ilike(ParentMeeting.status)],
        scopes={
            TEACHER: scopes.own(ParentMeeting.teacher_id),
            PARENT: scopes.own(ParentMeeting.parent_id),
        },
        order_by=[ParentMeeting.meeting_date.desc()],
    ),
    related={'parents': options.active_parents, 'teachers': options.active_teachers},
    list_roles=(ADMIN, TEACHER, PARENT),
    write_roles=(ADMIN, TEACHER),
)

ENTITIES = [event, announcement, parent_meeting]
