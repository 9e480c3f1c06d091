"""
Tests for declarative table models
"""
import pytest

from dynaschema.attributes import BinaryAttribute, NumberAttribute, UnicodeAttribute
from dynaschema.description import (
    AttributeDefinition, KeySchemaElement, Projection, ProvisionedThroughput,
)
from dynaschema.exceptions import MalformedSchemaError
from dynaschema.indexes import GlobalSecondaryIndex, IncludeProjection, LocalSecondaryIndex
from dynaschema.models import Model, get_tables
from dynaschema.schema import get_create_table_request
from dynaschema.types import HASH, RANGE
from .data import SimpleRecord, TestHealthDataRecord


def test_describe(declared_table):
    assert declared_table.table_name == 'TestHealthDataRecord'
    assert declared_table.key_schema == (KeySchemaElement('key', HASH), KeySchemaElement('recordId', RANGE))
    assert declared_table.hash_keyname == 'key'
    assert declared_table.range_keyname == 'recordId'
    assert declared_table.provisioned_throughput == ProvisionedThroughput(30, 50)
    assert sorted(index.index_name for index in declared_table.local_secondary_indexes) == [
        'endDate-index', 'startDate-index']
    assert [index.index_name for index in declared_table.global_secondary_indexes] == ['secondary-index']

    gsi = declared_table.global_secondary_indexes[0]
    assert gsi.key_schema == (KeySchemaElement('healthCode', HASH),)
    assert gsi.projection == Projection('KEYS_ONLY')
    assert gsi.provisioned_throughput == ProvisionedThroughput(20, 10)


def test_describe__table_name_override():
    assert TestHealthDataRecord.describe('local-test-TestHealthDataRecord').table_name == \
        'local-test-TestHealthDataRecord'


def test_describe__meta_table_name():
    class Upload(Model):
        class Meta:
            table_name = 'Upload2'

        upload_id = UnicodeAttribute(hash_key=True, attr_name='uploadId')

    description = Upload.describe()
    assert description.table_name == 'Upload2'
    assert description.key_schema == (KeySchemaElement('uploadId', HASH),)
    assert description.range_keyname is None
    assert description.provisioned_throughput == ProvisionedThroughput()


def test_range_key_declared_first():
    class Reading(Model):
        a_timestamp = NumberAttribute(range_key=True)
        z_device = BinaryAttribute(hash_key=True)

    assert Reading.describe().key_schema == (
        KeySchemaElement('z_device', HASH), KeySchemaElement('a_timestamp', RANGE))


def test_get_attributes():
    assert sorted(TestHealthDataRecord.get_attributes()) == [
        'data', 'end_date', 'health_code', 'key', 'record_id', 'start_date']
    assert SimpleRecord.get_attributes()['id'].attr_name == 'id'


def test_more_than_one_hash_key():
    with pytest.raises(ValueError):
        class Broken(Model):
            a = UnicodeAttribute(hash_key=True)
            b = UnicodeAttribute(hash_key=True)


def test_no_hash_key():
    class Keyless(Model):
        a = UnicodeAttribute()

    with pytest.raises(ValueError):
        Keyless.describe()


def test_attribute_cannot_be_both_keys():
    with pytest.raises(ValueError):
        UnicodeAttribute(hash_key=True, range_key=True)


def test_index_requires_projection():
    class NoProjectionIndex(GlobalSecondaryIndex):
        class Meta:
            index_name = 'no-projection'

        a = UnicodeAttribute(hash_key=True)

    with pytest.raises(ValueError):
        NoProjectionIndex()


def test_include_projection():
    with pytest.raises(ValueError):
        IncludeProjection()

    class TagsIndex(GlobalSecondaryIndex):
        class Meta:
            projection = IncludeProjection(['tags'])

        tag = UnicodeAttribute(hash_key=True)

    class Tagged(Model):
        id = UnicodeAttribute(hash_key=True)
        tag = UnicodeAttribute()
        tags_index = TagsIndex()

    description = Tagged.describe()
    index = description.global_secondary_indexes[0]
    assert index.index_name == 'tags_index'
    assert index.projection == Projection('INCLUDE', ('tags',))
    assert index.to_data()['Projection'] == {'ProjectionType': 'INCLUDE', 'NonKeyAttributes': ['tags']}


def test_conflicting_index_attribute_type():
    class CreatedOnIndex(LocalSecondaryIndex):
        class Meta:
            projection = IncludeProjection(['data'])

        id = UnicodeAttribute(hash_key=True)
        created_on = UnicodeAttribute(range_key=True, attr_name='createdOn')

    class Survey(Model):
        class Meta:
            read_capacity_units = 1
            write_capacity_units = 1

        id = UnicodeAttribute(hash_key=True)
        created_on = NumberAttribute(range_key=True, attr_name='createdOn')
        created_on_index = CreatedOnIndex()

    description = Survey.describe()
    assert AttributeDefinition('createdOn', 'N') in description.attribute_definitions
    assert AttributeDefinition('createdOn', 'S') in description.attribute_definitions
    with pytest.raises(MalformedSchemaError):
        get_create_table_request(description)


def test_get_tables():
    tables = get_tables([TestHealthDataRecord, SimpleRecord])
    assert [table.table_name for table in tables] == ['TestHealthDataRecord', 'SimpleRecord']
