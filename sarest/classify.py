"""
Store error classification

Exceptions raised by the store (SQLAlchemy) are converted to the sarest error types:
- ValidationError: field validation failed, also used for uniqueness violations
- NotFoundError: the requested id doesn't exist
- StoreQueryError: the store failed to execute the query
- GenericError: anything else
"""
import re
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import NoResultFound
from .errors import SARestError, ValidationError, NotFoundError, StoreQueryError, GenericError
from .sarest_types import ValidationFailure

UNIQUE_MSG = "must be unique"
NULL_MSG = "cannot be null"


def _unique_message(schema, attr_name):
    return schema.column(attr_name).info.get("unique_msg", UNIQUE_MSG)


def _error_message(exc):
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


def _column_in_message(schema, attr_name, message):
    column = schema.column(attr_name)
    # "users.user" must not match "users.username"
    return re.search(rf"\b{re.escape(column.table.name)}\.{re.escape(column.name)}\b", message) is not None


def find_unique_attribute(exc, schema):
    """
    Find the attribute that caused a unique constraint violation

    The constraint name is looked up in the model constraints (and `__unique_constraints__`).
    Some databases (sqlite) don't report constraint names, then the unique columns are
    matched against the error message.

    :return: attribute name or None
    """
    orig = getattr(exc, "orig", None)
    message = _error_message(exc)
    constraints = schema.unique_constraints()

    # psycopg reports the constraint name in the diagnostics
    constraint_name = getattr(getattr(orig, "diag", None), "constraint_name", None)
    if constraint_name in constraints:
        return constraints[constraint_name]

    for constraint_name, attr_name in constraints.items():
        if constraint_name in message:
            return attr_name

    for attr_name in schema.unique_attributes():
        if _column_in_message(schema, attr_name, message):
            return attr_name

    return None


def classify_integrity_error(exc, schema):
    """
    :param exc: sqlalchemy IntegrityError
    :param schema: SQLAlchemySchema of the model that was written
    :return: ValidationError if the violation can be attributed to an attribute, StoreQueryError otherwise
    """
    if schema is None:
        return StoreQueryError(str(exc))

    message = _error_message(exc)
    if "NOT NULL" in message.upper():
        for attr_name in schema.attribute_names():
            if _column_in_message(schema, attr_name, message):
                return ValidationError(f"{schema.name} validation failed", [ValidationFailure(attr_name, f"{attr_name} {NULL_MSG}")])

    attr_name = find_unique_attribute(exc, schema)
    if attr_name is not None:
        return ValidationError(f"{schema.name} validation failed", [ValidationFailure(attr_name, _unique_message(schema, attr_name))])

    return StoreQueryError(str(exc))


def classify(exc, schema=None):
    """
    :param exc: exception raised while handling a request
    :param schema: schema of the requested model, used to attribute constraint violations
    :return: SARestError instance
    """
    if isinstance(exc, SARestError):
        return exc
    if isinstance(exc, IntegrityError):
        return classify_integrity_error(exc, schema)
    if isinstance(exc, NoResultFound):
        return NotFoundError(str(exc))
    if isinstance(exc, SQLAlchemyError):
        return StoreQueryError(str(exc))
    return GenericError(str(exc))
