# flake8: noqa: F401
from .sarest_init import log, SARest
from .errors import (
    SARestError,
    ConfigurationError,
    ValidationError,
    NotFoundError,
    QuerySpecError,
    StoreQueryError,
    GenericError,
)
from .sarest_types import QuerySpec, SortKey, Criteria, SearchClause, ResultPage, ValidationFailure, ResourceDescriptor
from .fields import ModelSchema, SQLAlchemySchema, AttributeKind
from .resource import Resource
from .sarest_api import SARestAPI, initialize
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "SARest",
    "SARestAPI",
    "initialize",
    "Resource",
    "log",
    # schema:
    "ModelSchema",
    "SQLAlchemySchema",
    "AttributeKind",
    # types:
    "QuerySpec",
    "SortKey",
    "Criteria",
    "SearchClause",
    "ResultPage",
    "ValidationFailure",
    "ResourceDescriptor",
    # Errors:
    "SARestError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "QuerySpecError",
    "StoreQueryError",
    "GenericError",
)
