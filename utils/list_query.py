"""
List Query Builder.

Turns the query-string of a list page plus the caller's RequestContext into
one criteria list, then runs the page query and the count query from that
same list inside the request's session transaction.

Criteria are always AND'ed in this order: typed filters, the search OR-group,
then the role scope. A user filter can narrow a scope, never widen it.
"""
import logging
import math
from datetime import date, datetime, timedelta

from sqlalchemy import and_, false, or_

from models import UserRoles

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10


class InvalidFilterValue(ValueError):
    """A typed query-string filter could not be parsed"""

    def __init__(self, key, value):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for filter '{key}': {value!r}")


class ListPage:
    def __init__(self, data, count, page, per_page):
        self.data = data
        self.count = count
        self.page = page
        self.per_page = per_page

    @property
    def total_pages(self):
        return max(1, math.ceil(self.count / self.per_page)) if self.per_page else 1

    def to_dict(self, serialize):
        return {
            'data': [serialize(row) for row in self.data],
            'count': self.count,
            'page': self.page,
            'per_page': self.per_page,
            'total_pages': self.total_pages,
        }


class ListSpec:
    """Declarative description of one entity's list page.

    ``filters`` maps a query-string key to ``fn(raw) -> criterion``; a
    ValueError/TypeError from ``fn`` becomes InvalidFilterValue.
    ``search`` is a list of ``fn(pattern) -> criterion`` OR'ed together.
    ``scopes`` maps a role to ``fn(ctx) -> criterion or None``; None means the
    role sees every row. Admin is unrestricted unless it has an entry; any
    other role without an entry matches nothing.
    ``order_by`` lists the ordering expressions; the primary key is always
    appended as a tiebreak.
    """

    def __init__(self, model, filters=None, search=None, scopes=None, order_by=None):
        self.model = model
        self.filters = filters or {}
        self.search = search or []
        self.scopes = scopes or {}
        self.order_by = order_by or []

    def scope_criterion(self, ctx):
        if ctx.role in self.scopes:
            return self.scopes[ctx.role](ctx)
        if ctx.role == UserRoles.ADMIN:
            return None
        return false()

    def criteria(self, ctx, params):
        criteria = []
        for key, build in self.filters.items():
            raw = params.get(key)
            if raw is None or raw == '':
                continue
            try:
                criteria.append(build(raw))
            except (ValueError, TypeError):
                logger.info("Rejected list filter %s=%r on %s", key, raw, self.model.__tablename__)
                raise InvalidFilterValue(key, raw)

        search = (params.get('search') or '').strip()
        if search and self.search:
            pattern = f"%{escape_like(search)}%"
            criteria.append(or_(*[field(pattern) for field in self.search]))

        scope = self.scope_criterion(ctx)
        if scope is not None:
            criteria.append(scope)
        return criteria

    def ordering(self):
        return list(self.order_by) + list(self.model.__mapper__.primary_key)


def escape_like(value):
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def parse_page(raw):
    """Page number from the query string; 1 when absent, non-numeric or < 1"""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def run_list_query(spec, ctx, params, per_page=DEFAULT_PER_PAGE):
    page = parse_page(params.get('page'))
    criteria = spec.criteria(ctx, params)

    query = spec.model.query.filter(*criteria)
    count = query.order_by(None).count()
    rows = (
        query.order_by(*spec.ordering())
        .limit(per_page)
        .offset(per_page * (page - 1))
        .all()
    )
    return ListPage(rows, count, page, per_page)


# ---------------------------------------------------------------------------
# Filter builders
# ---------------------------------------------------------------------------

def eq(column, cast=int):
    return lambda raw: column == cast(raw)


def bool_eq(column):
    def build(raw):
        value = raw.strip().lower()
        if value not in ('true', 'false'):
            raise ValueError(raw)
        return column.is_(value == 'true')
    return build


def day_range(column):
    """Match the whole calendar day named by an ISO date (time part ignored)"""
    def build(raw):
        day = date.fromisoformat(raw[:10])
        start = datetime.combine(day, datetime.min.time())
        return and_(column >= start, column < start + timedelta(days=1))
    return build


def min_value(column, cast=float):
    return lambda raw: column >= cast(raw)


def max_value(column, cast=float):
    return lambda raw: column <= cast(raw)


def via(relationship, build):
    """Apply a filter builder across a relationship using EXISTS"""
    return lambda raw: _exists(relationship, build(raw))


# ---------------------------------------------------------------------------
# Search builders
# ---------------------------------------------------------------------------

def ilike(column, *through):
    """Case-insensitive substring match on ``column``.

    ``through`` is the chain of relationships from the listed model to the
    model owning ``column``; each hop becomes an EXISTS, so matches on a
    to-many side never duplicate rows.
    """
    def build(pattern):
        criterion = column.ilike(pattern, escape='\\')
        for relationship in reversed(through):
            criterion = _exists(relationship, criterion)
        return criterion
    return build


def _exists(relationship, criterion):
    if relationship.property.uselist:
        return relationship.any(criterion)
    return relationship.has(criterion)
