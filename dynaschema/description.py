"""
Table description value types

A TableDescription is used both for the schema declared by a model and for the schema
DynamoDB reports for a live table. Translation to and from the DynamoDB wire shape only
happens in the ``from_data`` / ``to_data`` methods.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from dynaschema import _schema
from dynaschema.constants import (
    ATTR_DEFINITIONS, ATTR_NAME, ATTR_TYPE, GLOBAL_SECONDARY_INDEXES, INDEX_NAME, KEY_SCHEMA, KEY_TYPE,
    KEYS_ONLY, LOCAL_SECONDARY_INDEXES, NON_KEY_ATTRIBUTES, PROJECTION, PROJECTION_TYPE,
    PROVISIONED_THROUGHPUT, READ_CAPACITY_UNITS, TABLE_NAME, TABLE_STATUS, WRITE_CAPACITY_UNITS,
)
from dynaschema.types import HASH, RANGE


@dataclass(frozen=True)
class KeySchemaElement:
    attribute_name: str
    key_type: str

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> 'KeySchemaElement':
        return cls(data[ATTR_NAME], str(data[KEY_TYPE]).upper())

    def to_data(self) -> _schema.KeySchema:
        return {ATTR_NAME: self.attribute_name, KEY_TYPE: self.key_type}


@dataclass(frozen=True)
class AttributeDefinition:
    attribute_name: str
    attribute_type: str

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> 'AttributeDefinition':
        return cls(data[ATTR_NAME], data[ATTR_TYPE])

    def to_data(self) -> _schema.SchemaAttrDefinition:
        return {ATTR_NAME: self.attribute_name, ATTR_TYPE: self.attribute_type}


@dataclass(frozen=True)
class Projection:
    projection_type: str = KEYS_ONLY
    non_key_attributes: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_data(cls, data: Optional[Mapping[str, Any]]) -> 'Projection':
        if not data:
            return cls()
        non_key_attributes = data.get(NON_KEY_ATTRIBUTES)
        return cls(
            data.get(PROJECTION_TYPE, KEYS_ONLY),
            tuple(non_key_attributes) if non_key_attributes else None,
        )

    def to_data(self) -> _schema.Projection:
        data: _schema.Projection = {PROJECTION_TYPE: self.projection_type}
        if self.non_key_attributes:
            data[NON_KEY_ATTRIBUTES] = list(self.non_key_attributes)
        return data


@dataclass(frozen=True)
class ProvisionedThroughput:
    read_capacity_units: Optional[int] = None
    write_capacity_units: Optional[int] = None

    @classmethod
    def from_data(cls, data: Optional[Mapping[str, Any]]) -> 'ProvisionedThroughput':
        if not data:
            return cls()
        return cls(data.get(READ_CAPACITY_UNITS), data.get(WRITE_CAPACITY_UNITS))

    def to_data(self) -> _schema.ProvisionedThroughput:
        return {
            READ_CAPACITY_UNITS: self.read_capacity_units,  # type: ignore
            WRITE_CAPACITY_UNITS: self.write_capacity_units,  # type: ignore
        }


def _key_schema_from_data(data: Iterable[Mapping[str, Any]]) -> Tuple[KeySchemaElement, ...]:
    return tuple(KeySchemaElement.from_data(item) for item in data)


def hash_first(key_schema: Iterable[KeySchemaElement]) -> Tuple[KeySchemaElement, ...]:
    # HASH sorts before RANGE
    return tuple(sorted(key_schema, key=lambda element: element.key_type))


@dataclass(frozen=True)
class LocalSecondaryIndex:
    """
    An alternate range key sharing the table's hash key
    """
    index_name: str
    key_schema: Tuple[KeySchemaElement, ...]
    projection: Projection = field(default_factory=Projection)

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> 'LocalSecondaryIndex':
        return cls(
            data[INDEX_NAME],
            _key_schema_from_data(data.get(KEY_SCHEMA, [])),
            Projection.from_data(data.get(PROJECTION)),
        )

    def to_data(self) -> _schema.LocalSecondaryIndexSchema:
        return {
            INDEX_NAME: self.index_name,
            KEY_SCHEMA: [element.to_data() for element in hash_first(self.key_schema)],
            PROJECTION: self.projection.to_data(),
        }


@dataclass(frozen=True)
class GlobalSecondaryIndex:
    """
    An index with its own key schema and throughput
    """
    index_name: str
    key_schema: Tuple[KeySchemaElement, ...]
    projection: Projection = field(default_factory=Projection)
    provisioned_throughput: ProvisionedThroughput = field(default_factory=ProvisionedThroughput)

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> 'GlobalSecondaryIndex':
        return cls(
            data[INDEX_NAME],
            _key_schema_from_data(data.get(KEY_SCHEMA, [])),
            Projection.from_data(data.get(PROJECTION)),
            ProvisionedThroughput.from_data(data.get(PROVISIONED_THROUGHPUT)),
        )

    def to_data(self) -> _schema.GlobalSecondaryIndexSchema:
        return {
            INDEX_NAME: self.index_name,
            KEY_SCHEMA: [element.to_data() for element in hash_first(self.key_schema)],
            PROJECTION: self.projection.to_data(),
            PROVISIONED_THROUGHPUT: self.provisioned_throughput.to_data(),
        }


@dataclass(frozen=True)
class TableDescription:
    """
    The schema of a table: name, keys, attribute definitions, indexes and throughput
    """
    table_name: str
    key_schema: Tuple[KeySchemaElement, ...]
    attribute_definitions: Tuple[AttributeDefinition, ...] = ()
    local_secondary_indexes: Tuple[LocalSecondaryIndex, ...] = ()
    global_secondary_indexes: Tuple[GlobalSecondaryIndex, ...] = ()
    provisioned_throughput: ProvisionedThroughput = field(default_factory=ProvisionedThroughput)
    table_status: Optional[str] = field(default=None, compare=False)

    def __repr__(self) -> str:
        return "TableDescription<{}>".format(self.table_name)

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> 'TableDescription':
        """
        Builds a description from the `Table` element of a DescribeTable response
        """
        return cls(
            table_name=data[TABLE_NAME],
            key_schema=_key_schema_from_data(data.get(KEY_SCHEMA, [])),
            attribute_definitions=tuple(
                AttributeDefinition.from_data(item) for item in data.get(ATTR_DEFINITIONS, [])
            ),
            local_secondary_indexes=tuple(
                LocalSecondaryIndex.from_data(item) for item in data.get(LOCAL_SECONDARY_INDEXES) or []
            ),
            global_secondary_indexes=tuple(
                GlobalSecondaryIndex.from_data(item) for item in data.get(GLOBAL_SECONDARY_INDEXES) or []
            ),
            provisioned_throughput=ProvisionedThroughput.from_data(data.get(PROVISIONED_THROUGHPUT)),
            table_status=data.get(TABLE_STATUS),
        )

    @property
    def hash_keyname(self) -> str:
        """
        Returns the name of this table's hash key
        """
        for element in self.key_schema:
            if element.key_type == HASH:
                return element.attribute_name
        raise ValueError("No hash_key found in key schema")

    @property
    def range_keyname(self) -> Optional[str]:
        """
        Returns the name of this table's range key
        """
        for element in self.key_schema:
            if element.key_type == RANGE:
                return element.attribute_name
        return None
