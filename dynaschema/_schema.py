import sys
from typing import List

if sys.version_info >= (3, 8):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    from typing import NotRequired
else:
    from typing_extensions import NotRequired


class SchemaAttrDefinition(TypedDict):
    AttributeName: str
    AttributeType: str


class KeySchema(TypedDict):
    AttributeName: str
    KeyType: str


class Projection(TypedDict):
    ProjectionType: str
    NonKeyAttributes: NotRequired[List[str]]


class ProvisionedThroughput(TypedDict, total=False):
    ReadCapacityUnits: int
    WriteCapacityUnits: int


class LocalSecondaryIndexSchema(TypedDict):
    IndexName: str
    KeySchema: List[KeySchema]
    Projection: Projection


class GlobalSecondaryIndexSchema(LocalSecondaryIndexSchema):
    ProvisionedThroughput: NotRequired[ProvisionedThroughput]


class CreateTableSchema(TypedDict):
    TableName: str
    AttributeDefinitions: List[SchemaAttrDefinition]
    KeySchema: List[KeySchema]
    ProvisionedThroughput: ProvisionedThroughput
    LocalSecondaryIndexes: NotRequired[List[LocalSecondaryIndexSchema]]
    GlobalSecondaryIndexes: NotRequired[List[GlobalSecondaryIndexSchema]]
