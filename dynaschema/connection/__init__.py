"""
dynaschema lowest level connection
"""

from dynaschema.connection.base import Connection


__all__ = [
    "Connection",
]
