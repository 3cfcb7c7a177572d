"""
Attribute validators

Validators are declared in the column info, for example:

    email = db.Column(db.String, unique=True,
                      info={"validate": {"is_email": True}, "unique_msg": "must be unique"})

A validator argument may be a dict with "args" and a custom "msg":

    name = db.Column(db.String, info={"validate": {"len": {"args": (2, 20), "msg": "2 to 20 characters"}}})

Each validator returns None when the value is valid, the error message otherwise
"""
import re
from email_validator import validate_email, EmailNotValidError
import sarest
from .errors import ConfigurationError


def is_email(value, arg=True):
    if not arg:
        return None
    try:
        validate_email(str(value), check_deliverability=False)
    except EmailNotValidError as exc:
        sarest.log.debug(f"Invalid email {value}: {exc}")
        return "must be a valid email"
    return None


def length(value, arg):
    minimum, maximum = arg
    size = len(str(value))
    if minimum is not None and size < minimum:
        return f"must contain at least {minimum} characters"
    if maximum is not None and size > maximum:
        return f"must contain at most {maximum} characters"
    return None


def is_in(value, arg):
    if value not in arg:
        return f"must be one of {', '.join(str(item) for item in arg)}"
    return None


def matches(value, arg):
    if not re.search(arg, str(value)):
        return f"must match {arg}"
    return None


def not_empty(value, arg=True):
    if arg and not str(value).strip():
        return "cannot be empty"
    return None


VALIDATORS = {
    "is_email": is_email,
    "len": length,
    "is_in": is_in,
    "matches": matches,
    "not_empty": not_empty,
}


def run_validators(column, value):
    """
    :param column: sqla column, the validators are declared in `column.info["validate"]`
    :param value: parsed attribute value
    :return: the first error message or None
    """
    rules = column.info.get("validate", {})
    for name, arg in rules.items():
        validator = VALIDATORS.get(name)
        if validator is None:
            sarest.log.warning(f'Unknown validator "{name}" for {column}')
            continue
        msg = None
        if isinstance(arg, dict):
            msg = arg.get("msg")
            arg = arg.get("args", True)
        try:
            result = validator(value, arg)
        except (TypeError, ValueError, re.error) as exc:
            # e.g. {"len": {"msg": ...}} without "args"
            raise ConfigurationError(f'Invalid arguments {arg!r} for validator "{name}" on {column}: {exc}')
        if result is not None:
            return msg or result
    return None
