"""
dynaschema constants
"""

# Operations
DESCRIBE_TABLE = 'DescribeTable'
CREATE_TABLE = 'CreateTable'
LIST_TABLES = 'ListTables'

# Request Parameters
EXCLUSIVE_START_TABLE_NAME = 'ExclusiveStartTableName'
ATTR_DEFINITIONS = 'AttributeDefinitions'
TABLE_STATUS = 'TableStatus'
TABLE_NAME = 'TableName'
KEY_SCHEMA = 'KeySchema'
ATTR_NAME = 'AttributeName'
ATTR_TYPE = 'AttributeType'
INDEX_NAME = 'IndexName'
TABLE_KEY = 'Table'
KEY_TYPE = 'KeyType'
ACTIVE = 'ACTIVE'
LIMIT = 'Limit'

# Response Parameters
TABLE_NAMES = 'TableNames'
LAST_EVALUATED_TABLE_NAME = 'LastEvaluatedTableName'

# SQS parameters
QUEUE_URL = 'QueueUrl'
MAX_NUMBER_OF_MESSAGES = 'MaxNumberOfMessages'
WAIT_TIME_SECONDS = 'WaitTimeSeconds'
RECEIPT_HANDLE = 'ReceiptHandle'
MESSAGE_BODY = 'MessageBody'
DELAY_SECONDS = 'DelaySeconds'
MESSAGES = 'Messages'

# Defaults
SERVICE_NAME = 'dynamodb'
SQS_SERVICE_NAME = 'sqs'
TABLE_NAME_SEPARATOR = '-'
DEFAULT_WAIT_TIME_SECONDS = 20
TABLE_STATUS_POLL_SECONDS = 2

# Create Table arguments
PROVISIONED_THROUGHPUT = 'ProvisionedThroughput'
READ_CAPACITY_UNITS = 'ReadCapacityUnits'
WRITE_CAPACITY_UNITS = 'WriteCapacityUnits'

# Key attribute types
BINARY = 'B'
NUMBER = 'N'
STRING = 'S'

KEY_ATTRIBUTE_TYPES = [BINARY, NUMBER, STRING]

# Constants needed for creating indexes
LOCAL_SECONDARY_INDEXES = 'LocalSecondaryIndexes'
GLOBAL_SECONDARY_INDEXES = 'GlobalSecondaryIndexes'
PROJECTION = 'Projection'
PROJECTION_TYPE = 'ProjectionType'
NON_KEY_ATTRIBUTES = 'NonKeyAttributes'
KEYS_ONLY = 'KEYS_ONLY'
ALL = 'ALL'
INCLUDE = 'INCLUDE'
