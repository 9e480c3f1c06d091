from unittest.mock import MagicMock

import pytest

from dynaschema.connection import Connection
from dynaschema.description import TableDescription
from .data import HEALTH_DATA_TABLE_DATA, TestHealthDataRecord


@pytest.fixture
def declared_table():
    return TestHealthDataRecord.describe()


@pytest.fixture
def live_table():
    return TableDescription.from_data(HEALTH_DATA_TABLE_DATA['Table'])


@pytest.fixture
def mock_connection():
    connection = MagicMock(spec=Connection)
    connection.region = 'us-east-1'
    return connection
