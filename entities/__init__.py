"""
Entity registry: one EntityConfig per list page/form, looked up by URL slug.
"""
from .base import EntityConfig
from . import academics, assessment, calendar, communication, finance, people

REGISTRY = {}
for _module in (people, academics, calendar, assessment, communication, finance):
    for _entity in _module.ENTITIES:
        REGISTRY[_entity.slug] = _entity

BY_KEY = {entity.key: entity for entity in REGISTRY.values()}


def get_entity(slug):
    return REGISTRY.get(slug)


__all__ = ['EntityConfig', 'REGISTRY', 'BY_KEY', 'get_entity']
