"""
Model attribute resolution

The query parser and the store only use the `ModelSchema` interface, so they don't depend on
the way the model attributes are declared. `SQLAlchemySchema` implements it for (Flask-)SQLAlchemy models.
"""
import datetime
import decimal
import enum
from abc import ABC, abstractmethod
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.schema import UniqueConstraint
from .errors import ConfigurationError


class AttributeKind(enum.Enum):
    TEXT = "text"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    OTHER = "other"


#
# Map the column python types to attribute kinds
# If a type isn't found in the table, OTHER will be used
#
PYTHON_TYPE_KIND = {
    str: AttributeKind.TEXT,
    int: AttributeKind.NUMERIC,
    float: AttributeKind.NUMERIC,
    decimal.Decimal: AttributeKind.NUMERIC,
    bool: AttributeKind.BOOLEAN,
    datetime.datetime: AttributeKind.TEMPORAL,
    datetime.date: AttributeKind.TEMPORAL,
    datetime.time: AttributeKind.TEMPORAL,
    datetime.timedelta: AttributeKind.TEMPORAL,
}


class ModelSchema(ABC):
    """
    Attribute metadata of an exposed model
    """

    name = ""

    @abstractmethod
    def attribute_names(self) -> list:
        """
        :return: the attribute names, in declaration order
        """

    @abstractmethod
    def attribute_kind(self, name: str) -> AttributeKind:
        """
        :return: kind of the `name` attribute
        """

    @abstractmethod
    def primary_keys(self) -> list:
        """
        :return: names of the primary key attributes
        """

    def is_valid(self, name: str) -> bool:
        """
        :param name: attribute name used in a query or payload
        :return: True if the attribute is declared on the model
        """
        return name in self.attribute_names()

    def search_attributes(self) -> list:
        """
        :return: the attributes used by the generic "q" search
        """
        return [name for name in self.attribute_names() if self.attribute_kind(name) is AttributeKind.TEXT]


class SQLAlchemySchema(ModelSchema):
    """
    ModelSchema implementation that introspects the SQLAlchemy mapper
    """

    def __init__(self, model):
        try:
            mapper = sqla_inspect(model)
        except NoInspectionAvailable:
            raise ConfigurationError(f"{model} is not a mapped model")
        if not hasattr(mapper, "column_attrs"):
            # e.g. an instance instead of a class was passed
            raise ConfigurationError(f"{model} is not a mapped model")

        self.model = model
        self.name = model.__name__
        self._columns = {attr.key: attr.columns[0] for attr in mapper.column_attrs}
        self._primary_keys = [mapper.get_property_by_column(col).key for col in mapper.primary_key]
        self.table = mapper.local_table

    def attribute_names(self):
        return list(self._columns)

    def is_valid(self, name):
        return name in self._columns

    def column(self, name):
        return self._columns[name]

    def attribute(self, name):
        """
        :return: the instrumented attribute, used to build sqla query expressions
        """
        return getattr(self.model, name)

    def attribute_kind(self, name):
        column = self._columns[name]
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            # custom column types
            return AttributeKind.OTHER
        if issubclass(python_type, enum.Enum):
            return AttributeKind.OTHER
        return PYTHON_TYPE_KIND.get(python_type, AttributeKind.OTHER)

    def primary_keys(self):
        return list(self._primary_keys)

    def is_required(self, name):
        """
        An attribute is required when it has to be supplied on creation:
        it can't be null and there's no default or generated value
        """
        column = self._columns[name]
        if column.nullable or name in self._primary_keys:
            return False
        return column.default is None and column.server_default is None

    def unique_attributes(self):
        """
        :return: attributes that have a single column unique constraint
        """
        result = [name for name, column in self._columns.items() if column.unique]
        for constraint in self.table.constraints:
            if not isinstance(constraint, UniqueConstraint) or len(constraint.columns) != 1:
                continue
            column = list(constraint.columns)[0]
            for name, col in self._columns.items():
                if col is column and name not in result:
                    result.append(name)
        # keep the declaration order
        return [name for name in self._columns if name in result]

    def unique_constraints(self):
        """
        Map the constraint names to the attribute names, used to identify the attribute when
        the database reports a constraint violation

        Models may specify `__unique_constraints__ = {"constraint_name": "attribute_name"}`
        """
        result = {}
        for constraint in self.table.constraints:
            if isinstance(constraint, UniqueConstraint) and isinstance(constraint.name, str) and len(constraint.columns) == 1:
                column = list(constraint.columns)[0]
                for name, col in self._columns.items():
                    if col is column:
                        result[constraint.name] = name
        result.update(getattr(self.model, "__unique_constraints__", {}))
        return result

    def identity(self, instance):
        """
        :return: the id of `instance`, only single column primary keys are supported
        """
        return getattr(instance, self._primary_keys[0])

    def to_dict(self, instance):
        """
        :return: dictionary with the instance attributes, the id included
        """
        return {name: getattr(instance, name) for name in self._columns}
