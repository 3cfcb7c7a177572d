"""
QuerySpec -> Criteria compilation

Response formatting follows filter -> sort -> paginate
"""
from .attr_parse import parse_attr
from .errors import QuerySpecError
from .sarest_types import Criteria, SearchClause, SortKey


def compile_filters(spec, schema):
    """
    Convert the filter values to the attribute types
    :return: tuple of (attribute name, values) pairs
    """
    result = []
    for attr_name, values in spec.equality_filters.items():
        if not schema.is_valid(attr_name):
            continue
        column = schema.column(attr_name)
        try:
            parsed = tuple(parse_attr(column, val) for val in values)
        except (TypeError, ValueError) as exc:
            raise QuerySpecError(f'Invalid filter value for "{attr_name}": {exc}')
        result.append((attr_name, parsed))
    return tuple(result)


def compile_order(spec, schema):
    """
    The sort keys are applied in the requested order, ties are broken by the primary key
    so the record order is deterministic (insertion order for autoincrement keys)
    """
    order = list(spec.sort_keys)
    sorted_attrs = {key.field for key in order}
    for pk in schema.primary_keys():
        if pk not in sorted_attrs:
            order.append(SortKey(pk))
    return tuple(order)


def compile_criteria(spec, schema):
    """
    :param spec: QuerySpec
    :param schema: ModelSchema
    :return: Criteria to be executed by the store
    """
    search = None
    if spec.generic_search:
        search = SearchClause(spec.generic_search, tuple(schema.search_attributes()))

    return Criteria(
        equals=compile_filters(spec, schema),
        search=search,
        order=compile_order(spec, schema),
        offset=spec.offset,
        limit=spec.count,
    )
