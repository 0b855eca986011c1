from flask import Blueprint, jsonify, request
from flask_wtf.csrf import generate_csrf

from forms import form_defaults, request_formdata
from utils.actions import perform_create, perform_delete, perform_update
from utils.context import login_required
from utils.related_data import resolve_related_data
from .list_routes import load_entity, not_found

form_bp = Blueprint('forms', __name__, url_prefix='/list')


@form_bp.route('/<slug>/form')
@login_required
def entity_form(slug, ctx):
    """Defaults and dropdown options for the create form, or the update form with ?id="""
    entity, error = load_entity(slug, ctx, write=True)
    if error:
        return error

    record = None
    record_id = request.args.get('id')
    if record_id:
        record = entity.get_scoped(ctx, record_id)
        if record is None:
            return not_found(entity)

    form = entity.form(formdata=None, obj=record)
    return jsonify({
        'success': True,
        'type': 'update' if record is not None else 'create',
        'defaults': form_defaults(form),
        'related': resolve_related_data(entity, ctx, record),
        'csrf_token': generate_csrf(),
    })


@form_bp.route('/<slug>/create', methods=['POST'])
@login_required
def create_entity(slug, ctx):
    entity, error = load_entity(slug, ctx, write=True)
    if error:
        return error

    form = entity.form(formdata=request_formdata())
    return perform_create(entity, ctx, form).to_response(entity.serialize)


@form_bp.route('/<slug>/<record_id>/update', methods=['POST'])
@login_required
def update_entity(slug, record_id, ctx):
    entity, error = load_entity(slug, ctx, write=True)
    if error:
        return error

    record = entity.get_scoped(ctx, record_id)
    if record is None:
        return not_found(entity)

    form = entity.form(formdata=request_formdata(), obj=record)
    return perform_update(entity, ctx, form, record).to_response(entity.serialize)


@form_bp.route('/<slug>/<record_id>/delete', methods=['POST'])
@login_required
def delete_entity(slug, record_id, ctx):
    entity, error = load_entity(slug, ctx, write=True)
    if error:
        return error

    record = entity.get_scoped(ctx, record_id)
    if record is None:
        return not_found(entity)

    return perform_delete(entity, ctx, record).to_response()
