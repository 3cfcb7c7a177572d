"""
List request argument parsing

    GET /users?username=arthur&q=gmail&offset=1&count=2&sort=username,-email

- offset, count: pagination
- sort: csv of attribute names, a "-" prefix means descending
- q: substring searched in all text attributes
- other arguments are attribute equality filters, arguments that don't match an attribute are ignored
"""
import sarest
from .config import get_int_config
from .errors import QuerySpecError
from .sarest_types import QuerySpec, SortKey

OFFSET = "offset"
COUNT = "count"
SORT = "sort"
SEARCH = "q"
RESERVED_PARAMS = (OFFSET, COUNT, SORT, SEARCH)


def _get_list(args, key):
    """
    :param args: werkzeug MultiDict (request.args) or a plain mapping
    :return: all values for `key`
    """
    if hasattr(args, "getlist"):
        return args.getlist(key)
    value = args.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _get_first(args, key):
    values = _get_list(args, key)
    return values[0] if values else None


def parse_int(name, value, minimum=0, maximum=None):
    """
    Pagination values are not coerced: "abc" or "-1" are errors
    :param name: argument name, used in the error message
    :param value: string value
    :return: int value, clamped to `maximum`
    """
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise QuerySpecError(f'Invalid "{name}" value "{value}"')
    if result < minimum:
        raise QuerySpecError(f'Invalid "{name}" value "{value}", minimum is {minimum}')
    if maximum is not None and result > maximum:
        sarest.log.warning(f'"{name}" value {result} exceeds {maximum}')
        result = maximum
    return result


def parse_sort(sort_csv, schema):
    """
    The sort order for each sort field is ascending unless it is prefixed
    with a minus, in which case it is descending.

    :param sort_csv: "username,-email"
    :param schema: ModelSchema
    :return: tuple of SortKey
    """
    result = []
    for token in sort_csv.split(","):
        token = token.strip()
        if not token:
            continue
        descending = token.startswith("-")
        attr_name = token[1:] if descending else token
        if not attr_name or not schema.is_valid(attr_name):
            # sorting on an unknown attribute is an error, not silently ignored
            raise QuerySpecError(f'Invalid sort attribute "{token}"')
        if any(key.field == attr_name for key in result):
            continue
        result.append(SortKey(attr_name, descending))
    return tuple(result)


def parse_query(args, schema, reserved=RESERVED_PARAMS):
    """
    :param args: request query arguments
    :param schema: ModelSchema of the queried model
    :param reserved: argument names that are not used as filters
    :return: QuerySpec
    """
    filters = {}
    for arg_name in args.keys():
        if arg_name in reserved:
            continue
        if not schema.is_valid(arg_name):
            sarest.log.debug(f"Ignoring filter {arg_name}: not an attribute of {schema.name}")
            continue
        filters[arg_name] = tuple(_get_list(args, arg_name))

    offset = 0
    count = get_int_config("DEFAULT_PAGE_LIMIT")
    sort_keys = ()
    search = None

    if OFFSET in reserved and _get_first(args, OFFSET) is not None:
        offset = parse_int(OFFSET, _get_first(args, OFFSET), 0, get_int_config("MAX_PAGE_OFFSET"))
    if COUNT in reserved and _get_first(args, COUNT) is not None:
        count = parse_int(COUNT, _get_first(args, COUNT), 1, get_int_config("MAX_PAGE_LIMIT"))
    if SORT in reserved and _get_first(args, SORT):
        sort_keys = parse_sort(_get_first(args, SORT), schema)
    if SEARCH in reserved:
        # an empty "q" is no search
        search = _get_first(args, SEARCH) or None

    return QuerySpec(equality_filters=filters, generic_search=search, offset=offset, count=count, sort_keys=sort_keys)
