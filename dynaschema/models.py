"""
Declarative table models

A model declares the schema of one table::

    class HealthDataRecord(Model):
        class Meta:
            read_capacity_units = 30
            write_capacity_units = 50

        key = UnicodeAttribute(hash_key=True)
        record_id = UnicodeAttribute(range_key=True, attr_name='recordId')
        upload_index = UploadIndex()

The logical table name defaults to the class name. ``describe()`` turns the declaration
into a :class:`~dynaschema.description.TableDescription`.
"""
import logging
from inspect import getmembers
from typing import Any, Dict, Iterable, List, Optional, Type

from dynaschema.attributes import Attribute
from dynaschema.description import ProvisionedThroughput, TableDescription, hash_first
from dynaschema.indexes import GlobalSecondaryIndex, Index, LocalSecondaryIndex

log = logging.getLogger(__name__)


class Model(object):
    """
    Defines a dynaschema Model
    """
    Meta: Any = None

    _attributes: Dict[str, Attribute] = {}
    _indexes: Dict[str, Index] = {}
    _hash_keyname: Optional[str] = None
    _range_keyname: Optional[str] = None

    @classmethod
    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)  # type: ignore  # see https://github.com/python/mypy/issues/4660
        cls._attributes = {}
        cls._indexes = {}
        cls._hash_keyname = None
        cls._range_keyname = None
        for name, attribute in getmembers(cls, lambda o: isinstance(o, Attribute)):
            cls._attributes[name] = attribute
            if attribute.is_hash_key:
                if cls._hash_keyname and cls._hash_keyname != name:
                    raise ValueError(f"{cls.__name__} has more than one hash key: {cls._hash_keyname}, {name}")
                cls._hash_keyname = name
            if attribute.is_range_key:
                if cls._range_keyname and cls._range_keyname != name:
                    raise ValueError(f"{cls.__name__} has more than one range key: {cls._range_keyname}, {name}")
                cls._range_keyname = name
        for _, index in getmembers(cls, lambda o: isinstance(o, Index)):
            cls._indexes[index.Meta.index_name] = index

    @classmethod
    def get_attributes(cls) -> Dict[str, Attribute]:
        """
        Returns the attributes of this class as a mapping from `python_attr_name` => `attribute`.
        """
        return cls._attributes

    @classmethod
    def get_table_name(cls) -> str:
        """
        Returns the logical table name, `Meta.table_name` or the class name
        """
        return getattr(cls.Meta, 'table_name', None) or cls.__name__

    @classmethod
    def describe(cls, table_name: Optional[str] = None) -> TableDescription:
        """
        Returns the declared schema of this model's table

        :param table_name: overrides the logical table name, e.g. with a fully qualified one
        """
        if cls._hash_keyname is None:
            raise ValueError(f"{cls.__name__} has no hash key")
        key_attributes = [
            attr for attr in cls._attributes.values() if attr.is_hash_key or attr.is_range_key
        ]
        attribute_definitions = [attr.get_attribute_definition() for attr in key_attributes]
        for index in cls._indexes.values():
            attribute_definitions.extend(index.get_attribute_definitions())

        return TableDescription(
            table_name=table_name or cls.get_table_name(),
            key_schema=hash_first(attr.get_key_schema_element() for attr in key_attributes),
            attribute_definitions=tuple(attribute_definitions),
            local_secondary_indexes=tuple(
                index.describe() for index in cls._indexes.values() if isinstance(index, LocalSecondaryIndex)
            ),
            global_secondary_indexes=tuple(
                index.describe() for index in cls._indexes.values() if isinstance(index, GlobalSecondaryIndex)
            ),
            provisioned_throughput=ProvisionedThroughput(
                getattr(cls.Meta, 'read_capacity_units', None),
                getattr(cls.Meta, 'write_capacity_units', None),
            ),
        )


def get_tables(models: Iterable[Type[Model]]) -> List[TableDescription]:
    """
    Returns the declared table descriptions for a collection of models
    """
    tables = []
    for model in models:
        description = model.describe()
        log.debug("Extracted schema for %s", description.table_name)
        tables.append(description)
    return tables
