"""
Server actions behind the entity forms.

Each action performs exactly one entity write (plus the entity's declared
side effects), commits, and invalidates the cached list path of the entity.
Results are returned as ActionResult so routes only translate them to JSON.
"""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from models import db
from utils.cache import get_list_cache

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"


class ActionResult:
    def __init__(self, success, status=200, message=None, errors=None, record=None):
        self.success = success
        self.status = status
        self.message = message
        self.errors = errors
        self.record = record

    @classmethod
    def ok(cls, record=None, status=200):
        return cls(True, status=status, record=record)

    @classmethod
    def invalid(cls, errors):
        return cls(False, status=400, errors=errors)

    @classmethod
    def failed(cls):
        return cls(False, status=500, message=GENERIC_ERROR)

    @classmethod
    def refused(cls, message):
        return cls(False, status=409, message=message)

    @classmethod
    def forbidden(cls):
        return cls(False, status=403, message="Access denied")

    def to_response(self, serialize=None):
        payload = {'success': self.success, 'error': not self.success}
        if self.message:
            payload['message'] = self.message
        if self.errors:
            payload['errors'] = self.errors
        if self.success and self.record is not None and serialize is not None:
            payload['data'] = serialize(self.record)
        return jsonify(payload), self.status


def perform_create(entity, ctx, form):
    if not form.validate():
        return ActionResult.invalid(form.errors)
    record = entity.model()
    return _save(entity, ctx, form, record, 'create')


def perform_update(entity, ctx, form, record):
    if not form.validate():
        return ActionResult.invalid(form.errors)
    return _save(entity, ctx, form, record, 'update')


def perform_delete(entity, ctx, record):
    for guard in entity.guards:
        message = guard(record)
        if message:
            logger.warning("Refused delete of %s %s: %s", entity.key, record.id, message)
            return ActionResult.refused(message)

    record_id = record.id
    try:
        db.session.delete(record)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to delete %s %s", entity.key, record_id)
        return ActionResult.failed()

    logger.info("Deleted %s %s by %s", entity.key, record_id, ctx.user_id)
    get_list_cache().invalidate(entity.list_path)
    return ActionResult.ok()


def _save(entity, ctx, form, record, operation):
    try:
        with db.session.no_autoflush:
            form.populate_obj(record)
            if entity.before_save:
                entity.before_save(record)
            if operation == 'create':
                db.session.add(record)
        db.session.flush()

        if not entity.in_scope(ctx, record):
            db.session.rollback()
            logger.warning("Refused %s of %s outside the scope of %s (%s)",
                           operation, entity.key, ctx.user_id, ctx.role)
            return ActionResult.forbidden()

        if entity.after_save:
            entity.after_save(record)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to %s %s", operation, entity.key)
        return ActionResult.failed()

    logger.info("%s %s %s by %s", operation.capitalize() + 'd', entity.key, record.id, ctx.user_id)
    get_list_cache().invalidate(entity.list_path)
    return ActionResult.ok(record, status=201 if operation == 'create' else 200)
