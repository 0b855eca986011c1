"""
Related-Data Resolver: the option lists a create/update form needs.
"""
import logging

logger = logging.getLogger(__name__)


def resolve_related_data(entity, ctx, record=None, supplied=None):
    """Return ``{collection: [option, ...]}`` for ``entity``'s form.

    Collections the caller already supplied are kept as given, even when
    empty; only missing or None entries are fetched. Fetches run one after
    another on the request's session.
    """
    related = dict(supplied or {})
    for name, fetch in entity.related.items():
        if related.get(name) is not None:
            continue
        related[name] = fetch(ctx, record)
    logger.debug("Resolved %s related collections for %s", len(related), entity.key)
    return related
