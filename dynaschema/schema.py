"""
Create table requests and schema comparison
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from dynaschema import _schema
from dynaschema.constants import (
    ATTR_DEFINITIONS, GLOBAL_SECONDARY_INDEXES, KEY_ATTRIBUTE_TYPES, KEY_SCHEMA, LOCAL_SECONDARY_INDEXES,
    PROVISIONED_THROUGHPUT, TABLE_NAME,
)
from dynaschema.description import (
    AttributeDefinition, GlobalSecondaryIndex, KeySchemaElement, LocalSecondaryIndex, ProvisionedThroughput,
    TableDescription, hash_first,
)
from dynaschema.exceptions import KeySchemaMismatchError, MalformedSchemaError
from dynaschema.types import HASH, RANGE

log = logging.getLogger(__name__)

_Index = Union[LocalSecondaryIndex, GlobalSecondaryIndex]


@dataclass(frozen=True)
class CreateTableRequest:
    """
    The arguments of a CreateTable operation

    Built by :func:`get_create_table_request` and not modified afterwards.
    """
    table_name: str
    key_schema: Tuple[KeySchemaElement, ...]
    attribute_definitions: Tuple[AttributeDefinition, ...]
    local_secondary_indexes: Tuple[LocalSecondaryIndex, ...]
    global_secondary_indexes: Tuple[GlobalSecondaryIndex, ...]
    provisioned_throughput: ProvisionedThroughput

    def __repr__(self) -> str:
        return "CreateTableRequest<{}>".format(self.table_name)

    @property
    def read_capacity_units(self) -> Optional[int]:
        return self.provisioned_throughput.read_capacity_units

    @property
    def write_capacity_units(self) -> Optional[int]:
        return self.provisioned_throughput.write_capacity_units

    def to_operation_kwargs(self) -> _schema.CreateTableSchema:
        """
        Returns the CreateTable request parameters
        """
        operation_kwargs: _schema.CreateTableSchema = {
            TABLE_NAME: self.table_name,
            KEY_SCHEMA: [element.to_data() for element in self.key_schema],
            ATTR_DEFINITIONS: [attr.to_data() for attr in self.attribute_definitions],
            PROVISIONED_THROUGHPUT: self.provisioned_throughput.to_data(),
        }
        if self.local_secondary_indexes:
            operation_kwargs[LOCAL_SECONDARY_INDEXES] = [index.to_data() for index in self.local_secondary_indexes]
        if self.global_secondary_indexes:
            operation_kwargs[GLOBAL_SECONDARY_INDEXES] = [index.to_data() for index in self.global_secondary_indexes]
        return operation_kwargs


def _validate_key_schema(table_name: str, owner: str, key_schema: Sequence[KeySchemaElement]) -> None:
    key_types = [element.key_type for element in key_schema]
    unknown = [key_type for key_type in key_types if key_type not in (HASH, RANGE)]
    if unknown:
        raise MalformedSchemaError("Unknown key type {} in {} of table `{}`".format(unknown, owner, table_name))
    if key_types.count(HASH) != 1:
        raise MalformedSchemaError(
            "{} of table `{}` must have exactly one hash key, found {}".format(owner, table_name, key_types.count(HASH)))
    if key_types.count(RANGE) > 1:
        raise MalformedSchemaError(
            "{} of table `{}` has more than one range key".format(owner, table_name))


def _validate_throughput(table_name: str, owner: str, throughput: ProvisionedThroughput) -> None:
    if throughput.read_capacity_units is None or throughput.write_capacity_units is None:
        raise MalformedSchemaError(
            "{} of table `{}` requires read and write capacity units, got {!r}".format(owner, table_name, throughput))


def _get_attribute_definitions(description: TableDescription) -> Tuple[AttributeDefinition, ...]:
    declared_types: Dict[str, str] = {}
    for attr in description.attribute_definitions:
        declared_type = declared_types.setdefault(attr.attribute_name, attr.attribute_type)
        if declared_type != attr.attribute_type:
            raise MalformedSchemaError(
                "Attribute `{}` of table `{}` is declared as both {} and {}".format(
                    attr.attribute_name, description.table_name, declared_type, attr.attribute_type))

    key_schemas: List[Iterable[KeySchemaElement]] = [description.key_schema]
    key_schemas.extend(index.key_schema for index in description.local_secondary_indexes)
    key_schemas.extend(index.key_schema for index in description.global_secondary_indexes)

    attribute_definitions: Dict[str, AttributeDefinition] = {}
    for key_schema in key_schemas:
        for element in key_schema:
            name = element.attribute_name
            if name in attribute_definitions:
                continue
            if name not in declared_types:
                raise MalformedSchemaError(
                    "Key attribute `{}` of table `{}` has no attribute definition".format(name, description.table_name))
            if declared_types[name] not in KEY_ATTRIBUTE_TYPES:
                raise MalformedSchemaError(
                    "Key attribute `{}` of table `{}` has non scalar type {}".format(
                        name, description.table_name, declared_types[name]))
            attribute_definitions[name] = AttributeDefinition(name, declared_types[name])
    return tuple(attribute_definitions.values())


def get_create_table_request(description: TableDescription) -> CreateTableRequest:
    """
    Builds the CreateTable request for a declared table description

    The hash key is always first in every key schema, and the attribute definitions are
    the distinct attributes referenced by the primary key and the index keys.

    Raises MalformedSchemaError if a key schema is malformed, a local index does not share
    the table hash key, a key attribute is declared with two different types, or the table
    or a global index has no read and write capacity units.
    """
    table_name = description.table_name
    _validate_key_schema(table_name, 'key schema', description.key_schema)
    _validate_throughput(table_name, 'provisioned throughput', description.provisioned_throughput)
    for local_index in description.local_secondary_indexes:
        owner = 'index `{}`'.format(local_index.index_name)
        _validate_key_schema(table_name, owner, local_index.key_schema)
        hash_keyname = hash_first(local_index.key_schema)[0].attribute_name
        if hash_keyname != description.hash_keyname:
            raise MalformedSchemaError("{} of table `{}` must use the table hash key `{}`, not `{}`".format(
                owner, table_name, description.hash_keyname, hash_keyname))
    for global_index in description.global_secondary_indexes:
        owner = 'index `{}`'.format(global_index.index_name)
        _validate_key_schema(table_name, owner, global_index.key_schema)
        _validate_throughput(table_name, owner, global_index.provisioned_throughput)

    request = CreateTableRequest(
        table_name=description.table_name,
        key_schema=hash_first(description.key_schema),
        attribute_definitions=_get_attribute_definitions(description),
        local_secondary_indexes=description.local_secondary_indexes,
        global_secondary_indexes=description.global_secondary_indexes,
        provisioned_throughput=description.provisioned_throughput,
    )
    log.debug("Built create table request for %s", description.table_name)
    return request


def _key_pairs(key_schema: Iterable[KeySchemaElement]) -> List[Tuple[str, str]]:
    return [(element.attribute_name, element.key_type) for element in key_schema]


def _compare_indexes(
    table_name: str,
    field: str,
    declared: Iterable[_Index],
    live: Iterable[_Index],
) -> None:
    declared_indexes: Mapping[str, _Index] = {index.index_name: index for index in declared}
    live_indexes: Mapping[str, _Index] = {index.index_name: index for index in live}
    if set(declared_indexes) != set(live_indexes):
        raise KeySchemaMismatchError(table_name, field, sorted(declared_indexes), sorted(live_indexes))
    for index_name in sorted(declared_indexes):
        expected = _key_pairs(declared_indexes[index_name].key_schema)
        actual = _key_pairs(live_indexes[index_name].key_schema)
        if expected != actual:
            raise KeySchemaMismatchError(
                table_name, '{} `{}` key schema'.format(field, index_name), expected, actual)


def compare_schema(declared: TableDescription, live: TableDescription) -> None:
    """
    Checks that a live table has the declared table name, key schema and index key schemas

    Throughput and projections are not compared.

    Raises KeySchemaMismatchError on the first difference found.
    """
    if declared.table_name != live.table_name:
        raise KeySchemaMismatchError(declared.table_name, 'table name', declared.table_name, live.table_name)

    expected = _key_pairs(declared.key_schema)
    actual = _key_pairs(live.key_schema)
    if expected != actual:
        raise KeySchemaMismatchError(declared.table_name, 'key schema', expected, actual)

    _compare_indexes(
        declared.table_name, 'global secondary index',
        declared.global_secondary_indexes, live.global_secondary_indexes)
    _compare_indexes(
        declared.table_name, 'local secondary index',
        declared.local_secondary_indexes, live.local_secondary_indexes)
