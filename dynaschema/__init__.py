"""
Environment-scoped DynamoDB table management and SQS polling helpers.

* Table naming: :mod:`dynaschema.naming`
* Create requests and schema comparison: :mod:`dynaschema.schema`
* Catalog discovery and provisioning: :mod:`dynaschema.catalog`
* Queue polling: :mod:`dynaschema.queue`
"""
__author__ = 'Bridge Platform'
__license__ = 'MIT'
__version__ = '1.0.0'
