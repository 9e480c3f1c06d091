"""
dynaschema attributes

Attributes only carry what a table schema needs: the stored name, the scalar type
and the key role.
"""
from typing import Any, List, Optional, Type

from dynaschema.constants import BINARY, NUMBER, STRING
from dynaschema.description import AttributeDefinition, KeySchemaElement
from dynaschema.types import HASH, RANGE


class Attribute(object):
    """
    An attribute of a model or index
    """
    attr_type: str

    def __init__(
        self,
        hash_key: bool = False,
        range_key: bool = False,
        attr_name: Optional[str] = None,
    ) -> None:
        if hash_key and range_key:
            raise ValueError("An attribute cannot be both a hash key and a range key")
        self.is_hash_key = hash_key
        self.is_range_key = range_key

        # __set_name__ will ensure this is a string
        self.attr_path: List[str] = [attr_name]  # type: ignore

    @property
    def attr_name(self) -> str:
        return self.attr_path[-1]

    @attr_name.setter
    def attr_name(self, value: str) -> None:
        self.attr_path[-1] = value

    def __set_name__(self, owner: Type[Any], name: str) -> None:
        self.attr_name = self.attr_name or name

    def __repr__(self) -> str:
        return "{}<{}>".format(type(self).__name__, self.attr_name)

    def get_attribute_definition(self) -> AttributeDefinition:
        return AttributeDefinition(self.attr_name, self.attr_type)

    def get_key_schema_element(self) -> Optional[KeySchemaElement]:
        """
        Returns the key schema element for a key attribute, None otherwise
        """
        if self.is_hash_key:
            return KeySchemaElement(self.attr_name, HASH)
        if self.is_range_key:
            return KeySchemaElement(self.attr_name, RANGE)
        return None


class BinaryAttribute(Attribute):
    """
    A binary attribute
    """
    attr_type = BINARY


class UnicodeAttribute(Attribute):
    """
    A unicode attribute
    """
    attr_type = STRING


class NumberAttribute(Attribute):
    """
    A number attribute
    """
    attr_type = NUMBER
