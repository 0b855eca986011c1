"""Seed default grades (1-12), exam types, rooms and school settings.

Run with:

    python scripts/seed_defaults.py

This script is idempotent and will only create missing records.
"""
import sys
from pathlib import Path

# When this script is executed as `python scripts/seed_defaults.py` the
# interpreter's sys.path[0] is the `scripts/` directory, so `app` (at the
# project root) isn't importable.
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root))

from models import db, ExamType, Grade, Room, SystemSetting

EXAM_TYPES = [
    ('Unit Test', 25, False),
    ('Mid Term', 50, False),
    ('Final', 100, True),
]

ROOMS = [
    ('Room 101', 40, 'Classroom'),
    ('Room 102', 40, 'Classroom'),
    ('Science Lab', 30, 'Laboratory'),
    ('Library', 60, 'Library'),
    ('Main Hall', 300, 'Auditorium'),
]

SETTINGS = [
    ('school_name', 'School Portal'),
    ('currency', 'USD'),
    ('timezone', 'UTC'),
]


def seed(app):
    with app.app_context():
        created = {'grades': [], 'exam_types': [], 'rooms': [], 'settings': []}

        for level in range(1, 13):
            if not Grade.query.filter_by(level=level).first():
                db.session.add(Grade(level=level))
                created['grades'].append(level)

        for name, total, has_practical in EXAM_TYPES:
            if not ExamType.query.filter_by(name=name).first():
                db.session.add(ExamType(name=name, total=total, has_practical=has_practical))
                created['exam_types'].append(name)

        for name, capacity, room_type in ROOMS:
            if not Room.query.filter_by(name=name).first():
                db.session.add(Room(name=name, capacity=capacity, type=room_type, available=True))
                created['rooms'].append(name)

        # settings an admin already changed are left alone
        for key, value in SETTINGS:
            if not SystemSetting.query.filter_by(category='general', key=key).first():
                SystemSetting.upsert_setting('general', key, value)
                created['settings'].append(key)

        if any(created.values()):
            db.session.commit()

        print('Created grades:', created['grades'])
        print('Created exam types:', created['exam_types'])
        print('Created rooms:', created['rooms'])
        print('Created settings:', created['settings'])
        return created


if __name__ == '__main__':
    # tables come from `flask db upgrade`
    from app import app
    seed(app)
