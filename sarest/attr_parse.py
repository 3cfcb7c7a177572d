import datetime
import decimal
import sarest
import sqlalchemy

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def parse_attr(column, attr_val):
    """
    Parse the supplied `attr_val` so it can be saved in or compared with the SQLAlchemy `column`
    Values come from the json body or from the url query string, the latter are always strings

    :param column: SQLAlchemy column
    :param attr_val: attribute value
    :return: processed value
    :raises ValueError: when the value can't be converted to the column type
    """
    if attr_val is None:
        return attr_val

    try:
        python_type = column.type.python_type
    except NotImplementedError as exc:
        """
        This happens when a custom type has been implemented, in which case the user/dev should know how to handle it:
        => simply return the attr_val for user-defined classes
        """
        sarest.log.debug(exc)
        return attr_val

    # skip type coercion on JSON columns, since they could be anything
    if isinstance(column.type, sqlalchemy.types.JSON):
        return attr_val

    if python_type is bool:
        if isinstance(attr_val, bool):
            return attr_val
        if str(attr_val).lower() in TRUE_VALUES:
            return True
        if str(attr_val).lower() in FALSE_VALUES:
            return False
        raise ValueError(f'Invalid boolean "{attr_val}"')

    if python_type is int and isinstance(attr_val, (bool, float)):
        # don't silently truncate, 1.5 is not an integer
        if isinstance(attr_val, bool) or not attr_val.is_integer():
            raise ValueError(f'Invalid integer "{attr_val}"')
        return int(attr_val)

    if python_type is datetime.datetime:
        if isinstance(attr_val, datetime.datetime):
            return attr_val
        # str(datetime.datetime.now()) => "%Y-%m-%d %H:%M:%S.%f", isoformat uses a "T" separator
        return datetime.datetime.fromisoformat(str(attr_val))

    if python_type is datetime.date:
        if isinstance(attr_val, datetime.date):
            return attr_val
        return datetime.date.fromisoformat(str(attr_val))

    if python_type is datetime.time:
        if isinstance(attr_val, datetime.time):
            return attr_val
        return datetime.time.fromisoformat(str(attr_val))

    if python_type is decimal.Decimal:
        try:
            return decimal.Decimal(str(attr_val))
        except decimal.InvalidOperation:
            raise ValueError(f'Invalid decimal "{attr_val}"')

    if python_type is str and isinstance(attr_val, (dict, list)):
        raise ValueError(f"Invalid string {attr_val}")

    return python_type(attr_val)
