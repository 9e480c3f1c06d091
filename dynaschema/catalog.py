"""
Table catalog discovery and provisioning
"""
import logging
import time
from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Optional

from dynaschema.connection import Connection
from dynaschema.constants import ACTIVE, LAST_EVALUATED_TABLE_NAME, TABLE_NAMES, TABLE_STATUS_POLL_SECONDS
from dynaschema.description import TableDescription
from dynaschema.exceptions import TableError
from dynaschema.naming import TableScope, belongs_to_scope
from dynaschema.schema import compare_schema, get_create_table_request

log = logging.getLogger(__name__)


class TableNamePageIterator(Iterator[List[str]]):
    """
    TableNamePageIterator handles ListTables result pagination.

    Each page is requested with the previous page's `LastEvaluatedTableName`; iteration
    stops after the first page that does not return one.

    https://docs.aws.amazon.com/amazondynamodb/latest/APIReference/API_ListTables.html
    """
    def __init__(self, connection: Connection, page_size: Optional[int] = None) -> None:
        self._connection = connection
        self._page_size = page_size
        self._first_iteration = True
        self._last_evaluated_table_name: Optional[str] = None
        self._total_count = 0

    def __iter__(self) -> Iterator[List[str]]:
        return self

    def __next__(self) -> List[str]:
        if self._last_evaluated_table_name is None and not self._first_iteration:
            raise StopIteration()

        self._first_iteration = False

        page = self._connection.list_tables(
            exclusive_start_table_name=self._last_evaluated_table_name,
            limit=self._page_size,
        )
        self._last_evaluated_table_name = page.get(LAST_EVALUATED_TABLE_NAME)
        table_names = page.get(TABLE_NAMES, [])
        self._total_count += len(table_names)
        log.debug("Listed %s tables, next page starts after %s", len(table_names), self._last_evaluated_table_name)
        return table_names

    @property
    def last_evaluated_table_name(self) -> Optional[str]:
        return self._last_evaluated_table_name

    @property
    def total_count(self) -> int:
        return self._total_count


class TableCatalog(object):
    """
    The tables visible to a connection
    """

    def __init__(self, connection: Connection, page_size: Optional[int] = None) -> None:
        self.connection = connection
        self.page_size = page_size

    def __repr__(self) -> str:
        return "TableCatalog<{}>".format(self.connection.region)

    def list_table_names(self) -> List[str]:
        """
        Returns the names of all tables, following every page of ListTables
        """
        table_names: List[str] = []
        for page in TableNamePageIterator(self.connection, page_size=self.page_size):
            table_names.extend(page)
        return table_names

    def describe_table(self, table_name: str) -> TableDescription:
        return TableDescription.from_data(self.connection.describe_table(table_name))

    def list_all_tables(self) -> Dict[str, TableDescription]:
        """
        Returns a description of every table, keyed by table name

        All pages are listed before any table is described. Any error while listing or
        describing propagates; no partial result is returned.
        """
        table_names = self.list_table_names()
        return {table_name: self.describe_table(table_name) for table_name in table_names}

    def list_scoped_tables(self, environment: Any, user: str) -> Dict[str, TableDescription]:
        """
        Returns the descriptions of the tables named `{environment}-{user}-*`
        """
        return {
            table_name: description
            for table_name, description in self.list_all_tables().items()
            if belongs_to_scope(table_name, environment, user)
        }

    def wait_until_active(self, table_name: str, poll_seconds: float = TABLE_STATUS_POLL_SECONDS) -> TableDescription:
        """
        Blocks until DescribeTable reports the table as ACTIVE
        """
        while True:
            description = self.describe_table(table_name)
            if description.table_status is None:
                raise TableError("No TableStatus returned for table {}".format(table_name))
            if description.table_status == ACTIVE:
                return description
            log.debug("Waiting for %s to become active, status %s", table_name, description.table_status)
            time.sleep(poll_seconds)

    def ensure_tables(
        self,
        tables: Iterable[TableDescription],
        scope: Optional[TableScope] = None,
        wait: bool = False,
    ) -> List[str]:
        """
        Creates the declared tables that do not exist and checks the schema of those that do

        :param tables: declared table descriptions with logical table names
        :param scope: if set, table names are qualified with its environment and user
        :param wait: if set, blocks until every created table is active

        Returns the names of the created tables. Raises KeySchemaMismatchError if an existing
        table does not match its declaration.
        """
        if scope is not None:
            existing = self.list_scoped_tables(scope.environment, scope.user)
        else:
            existing = self.list_all_tables()

        created = []
        for declared in tables:
            if scope is not None:
                declared = replace(declared, table_name=scope.qualify(declared.table_name))
            live = existing.get(declared.table_name)
            if live is not None:
                compare_schema(declared, live)
                log.debug("Table %s matches its declared schema", declared.table_name)
                continue
            log.info("Creating table %s", declared.table_name)
            self.connection.create_table(get_create_table_request(declared))
            created.append(declared.table_name)

        if wait:
            for table_name in created:
                self.wait_until_active(table_name)
        return created

