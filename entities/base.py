from models import UserRoles


class EntityConfig:
    """Everything the list/form/action routes need to know about one entity.

    ``related`` maps a collection name to ``fetch(ctx, record) -> [option]``.
    ``guards`` are ``fn(record) -> message or None`` run before a delete.
    ``before_save`` recomputes derived fields after the form is applied;
    ``after_save`` runs declared side effects once the row is flushed.
    """

    def __init__(self, key, slug, model, form, list_spec, related=None,
                 list_roles=(UserRoles.ADMIN,), write_roles=(UserRoles.ADMIN,),
                 guards=None, before_save=None, after_save=None, serialize=None):
        self.key = key
        self.slug = slug
        self.model = model
        self.form = form
        self.list_spec = list_spec
        self.related = related or {}
        self.list_roles = tuple(list_roles)
        self.write_roles = tuple(write_roles)
        self.guards = guards or []
        self.before_save = before_save
        self.after_save = after_save
        self._serialize = serialize

    def __repr__(self):
        return f"<EntityConfig {self.key}>"

    @property
    def list_path(self):
        return f"/list/{self.slug}"

    @property
    def query_keys(self):
        """Query-string keys the list page reads"""
        return frozenset(('page', 'search', *self.list_spec.filters))

    @property
    def primary_key(self):
        return self.model.__mapper__.primary_key[0]

    def can_list(self, ctx):
        return ctx.role in self.list_roles

    def can_write(self, ctx):
        return ctx.role in self.write_roles

    def parse_id(self, raw):
        """Typed primary key from a URL segment; ValueError when malformed"""
        if self.primary_key.type.python_type is int:
            return int(raw)
        return str(raw)

    def scoped_query(self, ctx):
        query = self.model.query
        scope = self.list_spec.scope_criterion(ctx)
        if scope is not None:
            query = query.filter(scope)
        return query

    def get_scoped(self, ctx, raw_id):
        """The record if it exists and the caller may reach it, else None"""
        try:
            record_id = self.parse_id(raw_id)
        except (TypeError, ValueError):
            return None
        return self.scoped_query(ctx).filter(self.primary_key == record_id).first()

    def in_scope(self, ctx, record):
        if self.list_spec.scope_criterion(ctx) is None:
            return True
        return self.scoped_query(ctx).filter(self.primary_key == record.id).first() is not None

    def serialize(self, record):
        if self._serialize is not None:
            return self._serialize(record)
        return record.to_dict()
