from flask import Blueprint, current_app, jsonify, request

from entities import get_entity
from utils.cache import get_list_cache
from utils.context import login_required
from utils.list_query import run_list_query

list_bp = Blueprint('lists', __name__, url_prefix='/list')


def load_entity(slug, ctx, write=False):
    """Return ``(entity, None)`` or ``(None, error_response)``"""
    entity = get_entity(slug)
    if entity is None:
        return None, (jsonify({'success': False, 'message': f"Unknown list '{slug}'"}), 404)
    allowed = entity.can_write(ctx) if write else entity.can_list(ctx)
    if not allowed:
        current_app.logger.warning("Access denied for %s (%s) on %s", ctx.user_id, ctx.role, entity.key)
        return None, (jsonify({'success': False, 'message': 'Access denied'}), 403)
    return entity, None


def not_found(entity):
    return jsonify({'success': False, 'message': f"{entity.key.replace('_', ' ').capitalize()} not found"}), 404


@list_bp.route('/<slug>')
@login_required
def list_entity(slug, ctx):
    entity, error = load_entity(slug, ctx)
    if error:
        return error

    cache = get_list_cache()
    key = cache.make_key(entity.list_path, request.args, ctx, entity.query_keys)
    payload = cache.get(key)
    if payload is None:
        page = run_list_query(entity.list_spec, ctx, request.args, current_app.config['ITEM_PER_PAGE'])
        payload = page.to_dict(entity.serialize)
        payload['success'] = True
        cache.set(key, payload)
    return jsonify(payload)


@list_bp.route('/<slug>/<record_id>')
@login_required
def entity_detail(slug, record_id, ctx):
    entity, error = load_entity(slug, ctx)
    if error:
        return error

    record = entity.get_scoped(ctx, record_id)
    if record is None:
        return not_found(entity)
    return jsonify({'success': True, 'data': entity.serialize(record)})
