"""
Tests for the base connection class
"""
from unittest import mock
from unittest.mock import patch

import pytest
from botocore.client import ClientError
from botocore.exceptions import BotoCoreError

from dynaschema.connection import Connection
from dynaschema.description import TableDescription
from dynaschema.exceptions import TableDoesNotExist, TableError
from dynaschema.schema import get_create_table_request
from .data import HEALTH_DATA_TABLE_DATA, LIST_TABLE_DATA, TestHealthDataRecord

PATCH_METHOD = 'dynaschema.connection.Connection._make_api_call'
TEST_TABLE_NAME = HEALTH_DATA_TABLE_DATA['Table']['TableName']
REGION = 'us-east-1'


def _resource_not_found():
    return ClientError(
        error_response={
            'Error': {
                'Code': 'ResourceNotFoundException',
                'Message': 'Requested resource not found: Table: {} not found'.format(TEST_TABLE_NAME),
            }
        },
        operation_name='DescribeTable',
    )


def test_connection__create():
    _ = Connection()
    conn = Connection(host='http://foohost')
    assert conn.client
    assert repr(conn) == "Connection<http://foohost>"


def test_connection__subsequent_client_is_not_cached_when_credentials_none():
    with patch('dynaschema.connection.Connection.session') as session_mock:
        session_mock.create_client.return_value._request_signer._credentials = None
        conn = Connection()

        # make two calls to .client property, expect two calls to create client
        assert conn.client
        conn.client

        session_mock.create_client.assert_has_calls(
            [
                mock.call('dynamodb', 'us-east-1', endpoint_url=None, config=mock.ANY),
                mock.call('dynamodb', 'us-east-1', endpoint_url=None, config=mock.ANY),
            ],
            any_order=True
        )


def test_connection__subsequent_client_is_cached_when_credentials_truthy():
    with patch('dynaschema.connection.Connection.session') as session_mock:
        session_mock.create_client.return_value._request_signer._credentials = True
        conn = Connection()

        # make two calls to .client property, expect one call to create client
        assert conn.client
        assert conn.client

        assert (
            session_mock.create_client.mock_calls.count(
                mock.call('dynamodb', 'us-east-1', endpoint_url=None, config=mock.ANY)) ==
            1
        )


def test_connection__client_is_passed_region_when_set():
    with patch('dynaschema.connection.Connection.session') as session_mock:
        session_mock.create_client.return_value._request_signer._credentials = True
        conn = Connection('eu-west-1')

        assert conn.client

        assert (
            session_mock.create_client.mock_calls.count(
                mock.call('dynamodb', 'eu-west-1', endpoint_url=None, config=mock.ANY)) ==
            1
        )


def test_connection__dispatch_uses_client():
    with patch('dynaschema.connection.Connection.session') as session_mock:
        client = session_mock.create_client.return_value
        client._make_api_call.return_value = LIST_TABLE_DATA
        conn = Connection(REGION)
        assert conn.dispatch('ListTables', {}) == LIST_TABLE_DATA
        client._make_api_call.assert_called_once_with('ListTables', {})


def test_connection_create_table():
    """
    Connection.create_table
    """
    conn = Connection(REGION)
    request = get_create_table_request(TestHealthDataRecord.describe(table_name=TEST_TABLE_NAME))

    with patch(PATCH_METHOD) as req:
        req.side_effect = BotoCoreError
        with pytest.raises(TableError):
            conn.create_table(request)

    with patch(PATCH_METHOD) as req:
        req.return_value = None
        conn.create_table(request)
        assert req.call_args[0][0] == 'CreateTable'
        params = req.call_args[0][1]
        assert params['TableName'] == TEST_TABLE_NAME
        assert params['KeySchema'] == [
            {'AttributeName': 'key', 'KeyType': 'HASH'},
            {'AttributeName': 'recordId', 'KeyType': 'RANGE'},
        ]
        assert params['ProvisionedThroughput'] == {'ReadCapacityUnits': 30, 'WriteCapacityUnits': 50}
        assert len(params['AttributeDefinitions']) == 5
        # Ensure that the hash key is first when creating indexes
        for index in params['LocalSecondaryIndexes'] + params['GlobalSecondaryIndexes']:
            assert index['KeySchema'][0]['KeyType'] == 'HASH'


def test_connection_create_table__client_error():
    conn = Connection(REGION)
    request = get_create_table_request(TestHealthDataRecord.describe(table_name=TEST_TABLE_NAME))
    error = ClientError(
        error_response={'Error': {'Code': 'ResourceInUseException', 'Message': 'Table already exists'}},
        operation_name='CreateTable',
    )
    with patch(PATCH_METHOD) as req:
        req.side_effect = error
        with pytest.raises(TableError) as excinfo:
            conn.create_table(request)
    assert excinfo.value.cause is error
    assert excinfo.value.cause_response_code == 'ResourceInUseException'


def test_connection_describe_table():
    """
    Connection.describe_table
    """
    with patch(PATCH_METHOD) as req:
        req.return_value = HEALTH_DATA_TABLE_DATA
        conn = Connection(REGION)
        data = conn.describe_table(TEST_TABLE_NAME)
        assert data == HEALTH_DATA_TABLE_DATA['Table']
        assert req.call_args[0][1] == {'TableName': TEST_TABLE_NAME}
        assert TableDescription.from_data(data).hash_keyname == 'key'

    with patch(PATCH_METHOD) as req:
        req.side_effect = BotoCoreError
        conn = Connection(REGION)
        with pytest.raises(TableError):
            conn.describe_table(TEST_TABLE_NAME)

    with patch(PATCH_METHOD) as req:
        req.side_effect = _resource_not_found()
        conn = Connection(REGION)
        with pytest.raises(TableDoesNotExist) as excinfo:
            conn.describe_table(TEST_TABLE_NAME)
        assert excinfo.value.table_name == TEST_TABLE_NAME
        assert excinfo.value.cause_response_code == 'ResourceNotFoundException'

    with patch(PATCH_METHOD) as req:
        req.side_effect = ClientError(
            error_response={'Error': {'Code': 'ThrottlingException', 'Message': 'Rate exceeded'}},
            operation_name='DescribeTable',
        )
        conn = Connection(REGION)
        with pytest.raises(TableError):
            conn.describe_table(TEST_TABLE_NAME)

    with patch(PATCH_METHOD) as req:
        req.return_value = {}
        conn = Connection(REGION)
        with pytest.raises(TableDoesNotExist):
            conn.describe_table(TEST_TABLE_NAME)


def test_connection_list_tables():
    """
    Connection.list_tables
    """
    with patch(PATCH_METHOD) as req:
        req.return_value = LIST_TABLE_DATA
        conn = Connection(REGION)
        conn.list_tables(exclusive_start_table_name='Thread')
        assert req.call_args[0][1] == {'ExclusiveStartTableName': 'Thread'}

    with patch(PATCH_METHOD) as req:
        req.return_value = LIST_TABLE_DATA
        conn = Connection(REGION)
        conn.list_tables(limit=3)
        assert req.call_args[0][1] == {'Limit': 3}

    with patch(PATCH_METHOD) as req:
        req.return_value = LIST_TABLE_DATA
        conn = Connection(REGION)
        assert conn.list_tables() == LIST_TABLE_DATA
        assert req.call_args[0][1] == {}

    with patch(PATCH_METHOD) as req:
        req.side_effect = BotoCoreError
        conn = Connection(REGION)
        with pytest.raises(TableError):
            conn.list_tables()
