"""
SQLAlchemy record store

Executes the compiled Criteria and the validated writes for a single model.
The session is provided by the Flask-SQLAlchemy `db` object, commit and rollback happen
at the request boundary (cfr. http_method_decorator)
"""
from sqlalchemy import or_, false
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import sarest
from .attr_parse import parse_attr
from .classify import classify, NULL_MSG, UNIQUE_MSG
from .errors import NotFoundError, ValidationError, StoreQueryError
from .sarest_types import ValidationFailure
from .validators import run_validators

CREATE = "create"
UPDATE = "update"
DELETE = "delete"


class SQLAlchemyStore:
    """
    :param db: Flask-SQLAlchemy instance
    :param schema: SQLAlchemySchema of the stored model
    """

    def __init__(self, db, schema):
        self.db = db
        self.schema = schema
        self.model = schema.model

    @property
    def session(self):
        return self.db.session

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    #
    # Queries
    #
    def _filter(self, criteria):
        """
        :return: sqla query with the equality and search filters applied
        """
        expressions = []
        for attr_name, values in criteria.equals:
            attr = self.schema.attribute(attr_name)
            if len(values) == 1:
                expressions.append(attr == values[0])
            else:
                expressions.append(attr.in_(values))

        if criteria.search is not None:
            terms = [self.schema.attribute(attr_name).contains(criteria.search.token, autoescape=True) for attr_name in criteria.search.fields]
            # no searchable attributes: nothing matches
            expressions.append(or_(*terms) if terms else false())

        return self.session.query(self.model).filter(*expressions)

    def _order_by(self, criteria):
        result = []
        for key in criteria.order:
            attr = self.schema.attribute(key.field)
            result.append(attr.desc() if key.descending else attr.asc())
        return result

    def count_and_fetch(self, criteria):
        """
        this is where the query is executed

        :param criteria: Criteria
        :return: (records, total), total is the number of matching records before offset and limit are applied
        """
        try:
            query = self._filter(criteria)
            total = query.order_by(None).count()
            query = query.order_by(*self._order_by(criteria))
            if criteria.offset:
                query = query.offset(criteria.offset)
            if criteria.limit is not None:
                query = query.limit(criteria.limit)
            records = query.all()
        except OverflowError:
            raise StoreQueryError("Pagination Overflow Error")
        except SQLAlchemyError as exc:
            raise StoreQueryError(f"Query failed for {self.schema.name}: {exc}")

        return records, total

    def get(self, identifier):
        """
        :param identifier: id from the url
        :return: instance
        :raises NotFoundError: no instance with this id
        """
        pk_column = self.schema.column(self.schema.primary_keys()[0])
        try:
            pk = parse_attr(pk_column, identifier)
        except (TypeError, ValueError):
            raise NotFoundError(f'Invalid "{self.schema.name}" ID "{identifier}"')
        if pk is None:
            raise NotFoundError(f'Missing "{self.schema.name}" ID')

        try:
            instance = self.session.get(self.model, pk)
        except SQLAlchemyError as exc:
            sarest.log.error(f"Failed to get {self.schema.name} instance with id {identifier}")
            raise StoreQueryError(f"get : {exc}")

        if instance is None:
            raise NotFoundError(f'Invalid "{self.schema.name}" ID "{identifier}"')
        return instance

    #
    # Writes
    #
    def _exists(self, attr_name, value, instance=None):
        """
        :return: True if another record has `value` for `attr_name`
        """
        attr = self.schema.attribute(attr_name)
        query = self.session.query(self.model).filter(attr == value)
        if instance is not None:
            pk_name = self.schema.primary_keys()[0]
            query = query.filter(self.schema.attribute(pk_name) != self.schema.identity(instance))
        with self.session.no_autoflush:
            return query.first() is not None

    def validate(self, payload, instance=None):
        """
        Validate the payload attributes in the order they were declared in the model,
        at most one failure is reported per attribute

        :param payload: attribute dict from the request body
        :param instance: the instance that will be updated, None when creating
        :return: dict with the parsed attribute values
        :raises ValidationError: with the failures
        """
        if not isinstance(payload, dict):
            raise ValidationError(f"Invalid payload {payload}")

        failures = []
        attributes = {}
        unique_attributes = self.schema.unique_attributes()
        primary_keys = self.schema.primary_keys()

        for attr_name in self.schema.attribute_names():
            column = self.schema.column(attr_name)
            if attr_name in primary_keys:
                if attr_name in payload and instance is None:
                    sarest.log.warning(f"Client generated IDs are not allowed for {self.schema.name}")
                continue

            if attr_name not in payload:
                if instance is None and self.schema.is_required(attr_name):
                    failures.append(ValidationFailure(attr_name, f"{attr_name} {NULL_MSG}"))
                continue

            value = payload[attr_name]
            if value is None:
                if not column.nullable:
                    failures.append(ValidationFailure(attr_name, f"{attr_name} {NULL_MSG}"))
                else:
                    attributes[attr_name] = None
                continue

            try:
                value = parse_attr(column, value)
            except (TypeError, ValueError) as exc:
                sarest.log.debug(f"Invalid value for {attr_name}: {exc}")
                failures.append(ValidationFailure(attr_name, f"invalid value for {attr_name}"))
                continue

            message = run_validators(column, value)
            if message is not None:
                failures.append(ValidationFailure(attr_name, message))
                continue

            if attr_name in unique_attributes and self._exists(attr_name, value, instance):
                failures.append(ValidationFailure(attr_name, column.info.get("unique_msg", UNIQUE_MSG)))
                continue

            attributes[attr_name] = value

        unknown = [key for key in payload if not self.schema.is_valid(key)]
        if unknown:
            sarest.log.debug(f"Ignoring unknown {self.schema.name} attributes {unknown}")

        if failures:
            raise ValidationError(f"{self.schema.name} validation failed", failures)
        return attributes

    def _flush(self):
        try:
            self.session.flush()
        except IntegrityError as exc:
            # constraint violations that were not detected by validate()
            raise classify(exc, self.schema)

    def create(self, payload):
        """
        :param payload: attribute dict
        :return: new instance, with an id
        """
        attributes = self.validate(payload)
        instance = self.model(**attributes)
        self.session.add(instance)
        self._flush()
        return instance

    def update(self, identifier, payload):
        """
        Only the attributes in the payload are updated
        :return: updated instance
        """
        instance = self.get(identifier)
        attributes = self.validate(payload if payload is not None else {}, instance)
        for attr_name, value in attributes.items():
            setattr(instance, attr_name, value)
        self._flush()
        return instance

    def delete(self, identifier):
        """
        :return: the deleted instance
        """
        instance = self.get(identifier)
        self.session.delete(instance)
        self._flush()
        return instance

    def write(self, operation, payload=None, identifier=None):
        """
        :param operation: CREATE, UPDATE or DELETE
        :param payload: attribute dict for create and update
        :param identifier: id of the instance to update or delete
        """
        if operation == CREATE:
            return self.create(payload)
        if operation == UPDATE:
            return self.update(identifier, payload)
        if operation == DELETE:
            return self.delete(identifier)
        raise ValueError(f"Invalid operation {operation}")
