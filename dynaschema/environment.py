"""
Deployment tiers
"""
from enum import Enum
from typing import Union

from dynaschema.exceptions import ConfigurationError


class Environment(Enum):
    """
    A deployment tier. The value is the canonical lowercase tag used in table names.
    """
    LOCAL = 'local'
    DEV = 'dev'
    UAT = 'uat'
    PROD = 'prod'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union['Environment', str, None]) -> 'Environment':
        """
        Returns the environment for a member or a tag (case insensitive)

        Raises ConfigurationError for a missing or unknown value
        """
        if isinstance(value, cls):
            return value
        if not value:
            raise ConfigurationError("environment is required")
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError("Unknown environment: {}".format(value))
