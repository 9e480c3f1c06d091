"""
Environment and user scoped table names

A fully qualified table name has the form ``{environment}-{user}-{logical name}``.
"""
from typing import Optional, Union

from dynaschema.constants import TABLE_NAME_SEPARATOR
from dynaschema.environment import Environment
from dynaschema.exceptions import ConfigurationError, TableNameError
from dynaschema.settings import get_settings_value

_EnvironmentType = Union[Environment, str]


def _prefix(environment: _EnvironmentType, user: str) -> str:
    if not user:
        raise ConfigurationError("user is required")
    return TABLE_NAME_SEPARATOR.join((Environment.parse(environment).value, user, ''))


def qualify(logical_name: str, environment: _EnvironmentType, user: str) -> str:
    """
    Returns the fully qualified table name for a logical table name
    """
    return _prefix(environment, user) + logical_name


def unqualify(qualified_name: str, environment: _EnvironmentType, user: str) -> str:
    """
    Returns the logical table name for a fully qualified table name

    Raises TableNameError if the name does not start with the environment and user prefix
    """
    prefix = _prefix(environment, user)
    if not qualified_name.startswith(prefix):
        raise TableNameError("Table `{}` does not start with `{}`".format(qualified_name, prefix))
    return qualified_name[len(prefix):]


def belongs_to_scope(qualified_name: str, environment: _EnvironmentType, user: str) -> bool:
    """
    Returns True if the table name starts with the environment and user prefix
    """
    return qualified_name.startswith(_prefix(environment, user))


class TableScope(object):
    """
    The environment and user that own a set of tables
    """

    def __init__(self, environment: _EnvironmentType, user: str) -> None:
        self.environment = Environment.parse(environment)
        if not user:
            raise ConfigurationError("user is required")
        self.user = user

    def __repr__(self) -> str:
        return "TableScope<{}-{}>".format(self.environment.value, self.user)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableScope):
            return NotImplemented
        return self.environment == other.environment and self.user == other.user

    def __hash__(self) -> int:
        return hash((self.environment, self.user))

    @classmethod
    def from_settings(cls, environment: Optional[_EnvironmentType] = None, user: Optional[str] = None) -> 'TableScope':
        """
        Builds a scope from the `environment` and `user` settings, unless given explicitly
        """
        if environment is None:
            environment = get_settings_value('environment')
        if user is None:
            user = get_settings_value('user')
        return cls(environment, user)  # type: ignore

    def qualify(self, logical_name: str) -> str:
        return qualify(logical_name, self.environment, self.user)

    def unqualify(self, qualified_name: str) -> str:
        return unqualify(qualified_name, self.environment, self.user)

    def contains(self, qualified_name: str) -> bool:
        return belongs_to_scope(qualified_name, self.environment, self.user)
