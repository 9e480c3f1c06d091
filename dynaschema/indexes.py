"""
dynaschema indexes
"""
from inspect import getmembers
from typing import Any, List, Optional, Tuple

from dynaschema.attributes import Attribute
from dynaschema.constants import ALL, INCLUDE, KEYS_ONLY
from dynaschema.description import (
    AttributeDefinition, GlobalSecondaryIndex as GlobalSecondaryIndexDescription,
    KeySchemaElement, LocalSecondaryIndex as LocalSecondaryIndexDescription, hash_first,
    Projection as ProjectionDescription, ProvisionedThroughput,
)


class Index(object):
    """
    Base class for secondary indexes
    """
    Meta: Any = None

    @classmethod
    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)  # type: ignore  # see https://github.com/python/mypy/issues/4660
        if cls.Meta is not None:
            cls.Meta.attributes = {}
            for name, attribute in getmembers(cls, lambda o: isinstance(o, Attribute)):
                cls.Meta.attributes[name] = attribute

    def __init__(self) -> None:
        if self.Meta is None:
            raise ValueError("Indexes require a Meta class for settings")
        if not hasattr(self.Meta, "projection"):
            raise ValueError("No projection defined, define a projection for this class")

    def __set_name__(self, owner: Any, name: str):
        if not hasattr(self.Meta, "index_name"):
            self.Meta.index_name = name

    @classmethod
    def _get_key_schema(cls) -> Tuple[KeySchemaElement, ...]:
        elements = (attr.get_key_schema_element() for attr in cls.Meta.attributes.values())
        return hash_first(element for element in elements if element is not None)

    @classmethod
    def _get_projection(cls) -> ProjectionDescription:
        non_key_attributes = cls.Meta.projection.non_key_attributes
        return ProjectionDescription(
            cls.Meta.projection.projection_type,
            tuple(non_key_attributes) if non_key_attributes else None,
        )

    @classmethod
    def get_attribute_definitions(cls) -> List[AttributeDefinition]:
        """
        Returns the definitions of the key attributes declared on this index
        """
        return [
            attr.get_attribute_definition()
            for attr in cls.Meta.attributes.values()
            if attr.is_hash_key or attr.is_range_key
        ]


class GlobalSecondaryIndex(Index):
    """
    A global secondary index
    """

    @classmethod
    def describe(cls) -> GlobalSecondaryIndexDescription:
        return GlobalSecondaryIndexDescription(
            cls.Meta.index_name,
            cls._get_key_schema(),
            cls._get_projection(),
            ProvisionedThroughput(
                getattr(cls.Meta, 'read_capacity_units', None),
                getattr(cls.Meta, 'write_capacity_units', None),
            ),
        )


class LocalSecondaryIndex(Index):
    """
    A local secondary index
    """

    @classmethod
    def describe(cls) -> LocalSecondaryIndexDescription:
        return LocalSecondaryIndexDescription(
            cls.Meta.index_name,
            cls._get_key_schema(),
            cls._get_projection(),
        )


class Projection(object):
    """
    A class for presenting projections
    """
    projection_type: Any = None
    non_key_attributes: Any = None


class KeysOnlyProjection(Projection):
    """
    Keys only projection
    """
    projection_type = KEYS_ONLY


class IncludeProjection(Projection):
    """
    An INCLUDE projection
    """
    projection_type = INCLUDE

    def __init__(self, non_attr_keys: Optional[List[str]] = None) -> None:
        if not non_attr_keys:
            raise ValueError("The INCLUDE type projection requires a list of string attribute names")
        self.non_key_attributes = non_attr_keys


class AllProjection(Projection):
    """
    An ALL projection
    """
    projection_type = ALL
