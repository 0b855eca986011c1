import logging

import pytz
from flask import Blueprint, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from models import SystemSetting, UserRoles, db
from utils.context import role_required
from utils.settings import SystemSettings

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

logger = logging.getLogger(__name__)

GENERAL_KEYS = ('school_name', 'currency', 'timezone')


@admin_bp.route('/system_settings', methods=['GET', 'POST'])
@role_required(UserRoles.ADMIN)
def system_settings(ctx):
    if request.method == 'POST':
        data = request.get_json(silent=True) or request.form
        updates = {key: (data.get(key) or '').strip() for key in GENERAL_KEYS if key in data}

        if 'timezone' in updates and updates['timezone'] not in pytz.all_timezones_set:
            return jsonify({'success': False, 'message': f"Unknown timezone '{updates['timezone']}'"}), 400
        if 'currency' in updates:
            updates['currency'] = updates['currency'].upper()

        try:
            for key, value in updates.items():
                SystemSetting.upsert_setting('general', key, value)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to save system settings")
            return jsonify({'success': False, 'message': 'Something went wrong!'}), 500
        finally:
            SystemSettings.invalidate_cache()

        logger.info("System settings %s updated by %s", sorted(updates), ctx.user_id)

    return jsonify({'success': True, 'settings': SystemSettings.get_category('general')})
