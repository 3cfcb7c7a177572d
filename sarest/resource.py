"""
Resource definition: the CRUD operations of an exposed model

    resource = Resource(model=User, db=db)
    resource.endpoints  # {"plural": "/users", "singular": "/users/:id"}

The endpoints are derived from the model name when they're not specified:
the table name (or class name) is pluralized, e.g. "person" => "/people", "/people/:id"
"""
import re
import inflect
import sarest
from .criteria import compile_criteria
from .errors import ConfigurationError
from .fields import SQLAlchemySchema
from .query_parser import parse_query
from .config import get_config
from .sarest_types import ResourceDescriptor, ResultPage
from .store import SQLAlchemyStore, CREATE, UPDATE, DELETE

# url parameters are written as ":name", e.g. "/users/:id"
URL_PARAM_RE = re.compile(r":(\w+)")

_inflect = inflect.engine()


def pluralize(name):
    """
    :param name: singular noun, e.g. "person"
    :return: plural form, e.g. "people". Names that are already plural are returned unchanged
    """
    singular = _inflect.singular_noun(name)
    # singular nouns ending in "s" (address, bus, analysis) also have a singular_noun() stem
    if singular and _inflect.plural_noun(singular) == name and not name.endswith(("ss", "us", "is")):
        return name
    return _inflect.plural_noun(name)


def model_base_name(model):
    return getattr(model, "__tablename__", None) or model.__name__.lower()


def derive_endpoints(model):
    """
    :return: (plural, singular) endpoint paths
    """
    plural = "/" + pluralize(model_base_name(model))
    return plural, plural + "/:id"


def to_url_rule(path):
    """
    Convert the endpoint path to a flask url rule: "/users/:id" => "/users/<id>"
    """
    return URL_PARAM_RE.sub(r"<\1>", path)


class Resource:
    """
    Binds a model to the query parsing, the store and the endpoint paths

    :param model: SQLAlchemy model class
    :param endpoints: optional (plural, singular) paths, e.g. ("/users", "/users/:id")
    :param db: Flask-SQLAlchemy instance providing the session
    :param url_prefix: prefix prepended to the exposed urls
    """

    def __init__(self, model=None, endpoints=None, db=None, url_prefix=""):
        if model is None:
            raise ConfigurationError("resource needs a model")

        self.schema = SQLAlchemySchema(model)
        if not self.schema.primary_keys():  # pragma: no cover
            raise ConfigurationError(f"{model} has no primary key")

        if endpoints:
            plural, singular = endpoints
        else:
            plural, singular = derive_endpoints(model)

        if not plural.startswith("/") or not singular.startswith("/"):
            raise ConfigurationError(f"paths must start with a / : {plural}, {singular}")
        if len(URL_PARAM_RE.findall(singular)) != 1:
            raise ConfigurationError(f'singular endpoint "{singular}" should contain one ":id" parameter')

        self.descriptor = ResourceDescriptor(plural=plural, singular=singular, model=model)
        self.url_prefix = url_prefix.rstrip("/")
        self.store = SQLAlchemyStore(db, self.schema)

    def __repr__(self):
        return f"<Resource {self.schema.name} {self.descriptor.plural}>"

    @property
    def model(self):
        return self.descriptor.model

    @property
    def endpoints(self):
        return self.descriptor.endpoints

    @property
    def id_param(self):
        """
        :return: name of the url parameter that holds the instance id
        """
        return URL_PARAM_RE.search(self.descriptor.singular).group(1)

    def url_rules(self):
        """
        :return: flask url rules for the collection and the instances
        """
        return self.url_prefix + to_url_rule(self.descriptor.plural), self.url_prefix + to_url_rule(self.descriptor.singular)

    def location(self, instance):
        """
        :return: url of `instance`, the singular path with the id substituted
        """
        identity = str(self.schema.identity(instance))
        return self.url_prefix + URL_PARAM_RE.sub(lambda _: identity, self.descriptor.singular)

    #
    # Operations
    #
    def list(self, args):
        """
        :param args: request query arguments
        :return: ResultPage
        """
        spec = parse_query(args, self.schema, get_config("RESERVED_PARAMS"))
        criteria = compile_criteria(spec, self.schema)
        records, total = self.store.count_and_fetch(criteria)
        page = ResultPage.from_slice(records, total, criteria.offset)
        sarest.log.debug(f"{self.schema.name} list {page.content_range}")
        return page

    def read(self, identifier):
        return self.store.get(identifier)

    def create(self, payload):
        return self.store.write(CREATE, payload)

    def update(self, identifier, payload):
        return self.store.write(UPDATE, payload, identifier)

    def delete(self, identifier):
        return self.store.write(DELETE, identifier=identifier)
