"""
Lowest level connection
"""
import logging
from threading import local
from typing import Any, Dict, Optional

import botocore.client
import botocore.session
from botocore.client import ClientError
from botocore.exceptions import BotoCoreError
from botocore.session import get_session

from dynaschema.constants import (
    CREATE_TABLE, DESCRIBE_TABLE, EXCLUSIVE_START_TABLE_NAME, LIMIT, LIST_TABLES, SERVICE_NAME, TABLE_KEY,
    TABLE_NAME,
)
from dynaschema.exceptions import TableDoesNotExist, TableError
from dynaschema.schema import CreateTableRequest
from dynaschema.settings import get_settings_value

BOTOCORE_EXCEPTIONS = (BotoCoreError, ClientError)

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


class Connection(object):
    """
    A higher level abstraction over the botocore DynamoDB client, limited to table
    management operations
    """

    def __init__(self,
                 region: Optional[str] = None,
                 host: Optional[str] = None,
                 read_timeout_seconds: Optional[float] = None,
                 connect_timeout_seconds: Optional[float] = None,
                 max_retry_attempts: Optional[int] = None,
                 max_pool_connections: Optional[int] = None):
        self.host = host
        self._local = local()
        self._client = None
        if region:
            self.region = region
        else:
            self.region = get_settings_value('region')

        if connect_timeout_seconds is not None:
            self._connect_timeout_seconds = connect_timeout_seconds
        else:
            self._connect_timeout_seconds = get_settings_value('connect_timeout_seconds')

        if read_timeout_seconds is not None:
            self._read_timeout_seconds = read_timeout_seconds
        else:
            self._read_timeout_seconds = get_settings_value('read_timeout_seconds')

        if max_retry_attempts is not None:
            self._max_retry_attempts = max_retry_attempts
        else:
            self._max_retry_attempts = get_settings_value('max_retry_attempts')

        if max_pool_connections is not None:
            self._max_pool_connections = max_pool_connections
        else:
            self._max_pool_connections = get_settings_value('max_pool_connections')

    def __repr__(self) -> str:
        return "Connection<{}>".format(self.client.meta.endpoint_url)

    def dispatch(self, operation_name: str, operation_kwargs: Dict) -> Dict:
        """
        Dispatches `operation_name` with arguments `operation_kwargs`
        """
        log.debug("Calling %s with arguments %s", operation_name, operation_kwargs)
        data = self._make_api_call(operation_name, operation_kwargs)
        log.debug("%s %s returned", operation_kwargs.get(TABLE_NAME, ''), operation_name)
        return data

    def _make_api_call(self, operation_name: str, operation_kwargs: Dict) -> Dict:
        """
        Sends the request through the botocore client.

        Retries are left to the client's retry configuration. This method also provides a
        place to monkey patch requests for unit testing.
        """
        return self.client._make_api_call(operation_name, operation_kwargs)

    @property
    def session(self) -> botocore.session.Session:
        """
        Returns a valid botocore session
        """
        # botocore client creation is not thread safe as of v1.2.5+ (see issue #153)
        if getattr(self._local, 'session', None) is None:
            self._local.session = get_session()
        return self._local.session

    @property
    def client(self):
        """
        Returns a botocore dynamodb client
        """
        # botocore has a known issue where it will cache empty credentials
        # https://github.com/boto/botocore/blob/4d55c9b4142/botocore/credentials.py#L1016-L1021
        # if the client does not have credentials, we create a new client
        # otherwise the client is permanently poisoned in the case of metadata service flakiness when using IAM roles
        if not self._client or (self._client._request_signer and not self._client._request_signer._credentials):
            config = botocore.client.Config(
                connect_timeout=self._connect_timeout_seconds,
                read_timeout=self._read_timeout_seconds,
                max_pool_connections=self._max_pool_connections,
                retries={'max_attempts': self._max_retry_attempts})
            self._client = self.session.create_client(SERVICE_NAME, self.region, endpoint_url=self.host, config=config)
        return self._client

    def create_table(self, request: CreateTableRequest) -> Dict:
        """
        Performs the CreateTable operation
        """
        operation_kwargs: Dict[str, Any] = dict(request.to_operation_kwargs())
        try:
            data = self.dispatch(CREATE_TABLE, operation_kwargs)
        except BOTOCORE_EXCEPTIONS as e:
            raise TableError("Failed to create table: {}".format(e), e)
        return data

    def list_tables(
        self,
        exclusive_start_table_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict:
        """
        Performs the ListTables operation
        """
        operation_kwargs: Dict[str, Any] = {}
        if exclusive_start_table_name:
            operation_kwargs.update({
                EXCLUSIVE_START_TABLE_NAME: exclusive_start_table_name
            })
        if limit is not None:
            operation_kwargs.update({
                LIMIT: limit
            })
        try:
            return self.dispatch(LIST_TABLES, operation_kwargs)
        except BOTOCORE_EXCEPTIONS as e:
            raise TableError("Unable to list tables: {}".format(e), e)

    def describe_table(self, table_name: str) -> Dict:
        """
        Performs the DescribeTable operation and returns the `Table` element of the response

        Raises TableDoesNotExist if the specified table does not exist
        """
        operation_kwargs = {
            TABLE_NAME: table_name
        }
        try:
            data = self.dispatch(DESCRIBE_TABLE, operation_kwargs)
        except BotoCoreError as e:
            raise TableError("Unable to describe table: {}".format(e), e)
        except ClientError as e:
            if 'ResourceNotFound' in e.response['Error']['Code']:
                raise TableDoesNotExist(table_name, e)
            raise TableError("Unable to describe table: {}".format(e), e)
        table_data = (data or {}).get(TABLE_KEY)
        if not table_data:
            raise TableDoesNotExist(table_name)
        return table_data
