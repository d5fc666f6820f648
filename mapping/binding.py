"""
Per-type binding tables.

A ``RecordBinding`` is built once per record class and answers three
questions for the row binder:

  - which property does a column name refer to?   (``find``)
  - how is an empty instance created?             (``create``)
  - how is a value stored on it?                  (``assign``)

Supported record types:
  - pydantic models: field names and string aliases; instances come
    from ``model_construct()`` so fields without defaults need no value
  - dataclasses: ``dataclasses.fields``; required fields are passed
    their zero value
  - plain classes: class annotations; instantiated with no arguments

``create`` returns a complete instance: every property the factory left
unset is set to its zero value (``PropertyInfo.zero_value``).
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from functools import lru_cache, partial
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from dto.property_info import PropertyInfo

logger = logging.getLogger(__name__)


class RecordBinding:
    """Name → ``PropertyInfo`` table plus instance factory for one record type."""

    def __init__(
        self,
        record_type: type,
        properties: Dict[str, PropertyInfo],
        factory: Callable[[], Any],
    ) -> None:
        self.record_type = record_type
        self.properties = properties
        self._factory = factory
        self._by_alias = {p.alias: p for p in properties.values() if p.alias}

    @classmethod
    def for_type(cls, record_type: type) -> "RecordBinding":
        return _binding_for(record_type)

    def find(self, name: str) -> Optional[PropertyInfo]:
        prop = self.properties.get(name)
        if prop is None:
            prop = self._by_alias.get(name)
        return prop

    def create(self) -> Any:
        record = self._factory()
        for prop in self.properties.values():
            if not hasattr(record, prop.name):
                setattr(record, prop.name, prop.zero_value)
        return record

    def assign(self, record: Any, prop: PropertyInfo, value: Any) -> None:
        setattr(record, prop.name, value)

    def __repr__(self) -> str:
        return f"RecordBinding({self.record_type.__name__}, {sorted(self.properties)})"


@lru_cache(maxsize=None)
def _binding_for(record_type: type) -> RecordBinding:
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        binding = _pydantic_binding(record_type)
    elif dataclasses.is_dataclass(record_type):
        binding = _dataclass_binding(record_type)
    else:
        binding = _annotated_class_binding(record_type)
    logger.debug("Built binding table: %r", binding)
    return binding


def _pydantic_binding(model: type) -> RecordBinding:
    properties = {}
    for name, field in model.model_fields.items():
        alias = field.validation_alias if isinstance(field.validation_alias, str) else field.alias
        properties[name] = PropertyInfo(name=name, annotation=field.annotation, alias=alias)
    return RecordBinding(model, properties, model.model_construct)


def _dataclass_binding(record_type: type) -> RecordBinding:
    hints = typing.get_type_hints(record_type)
    properties = {
        f.name: PropertyInfo(name=f.name, annotation=hints.get(f.name, f.type))
        for f in dataclasses.fields(record_type)
    }
    required = {
        f.name: properties[f.name].zero_value
        for f in dataclasses.fields(record_type)
        if f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    }
    return RecordBinding(record_type, properties, partial(record_type, **required))


def _annotated_class_binding(record_type: type) -> RecordBinding:
    hints = typing.get_type_hints(record_type)
    properties = {
        name: PropertyInfo(name=name, annotation=annotation)
        for name, annotation in hints.items()
        if not name.startswith("_") and typing.get_origin(annotation) is not typing.ClassVar
    }
    return RecordBinding(record_type, properties, record_type)
