"""
dynaschema exceptions
"""
from typing import Any
from typing import Optional


class DynaSchemaException(Exception):
    """
    Base class for all dynaschema exceptions.
    """

    msg: str

    def __init__(self, msg: Optional[str] = None, cause: Optional[Exception] = None) -> None:
        self.msg = msg if msg is not None else self.msg
        self.cause = cause
        super(DynaSchemaException, self).__init__(self.msg)

    @property
    def cause_response_code(self) -> Optional[str]:
        """
        The AWS response code such as:

        - ``ResourceNotFoundException``
        - ``ProvisionedThroughputExceededException``
        - ``AWS.SimpleQueueService.NonExistentQueue``

        Inspect this value to determine the cause of the error and handle it.
        """
        return getattr(self.cause, 'response', {}).get('Error', {}).get('Code')

    @property
    def cause_response_message(self) -> Optional[str]:
        """
        The human-readable description of the error returned by AWS.
        """
        return getattr(self.cause, 'response', {}).get('Error', {}).get('Message')


class ConfigurationError(DynaSchemaException):
    """
    Raised when the environment or user needed for table naming is missing or invalid
    """
    msg = "Invalid configuration"


class TableNameError(DynaSchemaException):
    """
    Raised when a table name does not carry the expected environment and user prefix
    """
    msg = "Table name is outside the current scope"


class MalformedSchemaError(DynaSchemaException):
    """
    Raised when a declared table schema cannot be turned into a create table request
    """
    msg = "Malformed table schema"


class KeySchemaMismatchError(DynaSchemaException):
    """
    Raised when a live table's key schema differs from the declared one
    """
    def __init__(self, table_name: str, field: str, expected: Any, actual: Any) -> None:
        self.table_name = table_name
        self.field = field
        self.expected = expected
        self.actual = actual
        msg = "Schema mismatch on table `{}` for {}: expected {!r}, got {!r}".format(
            table_name, field, expected, actual)
        super(KeySchemaMismatchError, self).__init__(msg)


class DynaSchemaConnectionError(DynaSchemaException):
    """
    A base class for connection errors
    """
    msg = "Connection Error"


class TableError(DynaSchemaConnectionError):
    """
    An error involving a dynamodb table operation
    """
    msg = "Error performing a table operation"


class QueueError(DynaSchemaConnectionError):
    """
    An error involving an SQS queue operation
    """
    msg = "Error performing a queue operation"


class TableDoesNotExist(TableError):
    """
    Raised when an operation is attempted on a table that doesn't exist
    """
    def __init__(self, table_name: str, cause: Optional[Exception] = None) -> None:
        self.table_name = table_name
        msg = "Table does not exist: `{}`".format(table_name)
        super(TableDoesNotExist, self).__init__(msg, cause)


class SerializationError(DynaSchemaException, TypeError):
    """
    Raised when a queue payload cannot be encoded as JSON
    """
    msg = "Unable to serialize message"
