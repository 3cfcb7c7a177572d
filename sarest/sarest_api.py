# flask_restful API subclass
from http import HTTPStatus
from functools import wraps
from flask_restful import Api as FRSApiBase
from flask.app import Flask
from typing import Callable
import sarest
from .classify import classify
from .errors import ConfigurationError
from .resource import Resource
from .response import error_response
from .rest import SARestCollectionAPI, SARestInstanceAPI
from .sarest_init import SARest

HTTP_METHODS = ["GET", "POST", "PUT", "DELETE"]


class SARestAPI(FRSApiBase):
    """
    Subclass of the flask_restful API class where we add the `resource` method,
    this method creates the CRUD endpoints for a model

    The api holds no global state: every api instance is bound to its own app and db
    and keeps track of the resources it exposed in `self.exposed_resources`
    """

    def __init__(self, app: Flask, db=None, url_prefix: str = "", **kwargs) -> None:
        """
        :param app: Flask app
        :param db: Flask-SQLAlchemy instance, by default the one registered on the app
        :param url_prefix: prefix for all exposed urls, e.g. "/api"
        :param kwargs: sarest configuration, stored in the app.config (e.g. MAX_PAGE_LIMIT=1000)
        """
        if db is None:
            db = app.extensions["sqlalchemy"]
        SARest.init_app(app, **kwargs)
        super().__init__(app)
        self.db = db
        self.url_prefix = url_prefix.rstrip("/")
        self.exposed_resources = []

    def resource(self, model=None, endpoints=None) -> Resource:
        """
        Create the CRUD endpoints for `model`

        :param model: SQLAlchemy model class
        :param endpoints: optional (plural, singular) paths, e.g. ("/users", "/users/:id"),
                          derived from the model name if not provided
        :return: Resource
        """
        if model is None:
            raise ConfigurationError("please specify a valid model")

        resource = Resource(model=model, endpoints=endpoints, db=self.db, url_prefix=self.url_prefix)
        self.expose_resource(resource)
        return resource

    def expose_resource(self, resource: Resource) -> None:
        """This method creates the url endpoints for the resource

        creates classes of the form

        @api_decorator
        class User_API(SARestCollectionAPI):
            resource = resource

        and adds them as api resources to /users and /users/<id>
        """
        name = resource.schema.name
        collection_url, instance_url = resource.url_rules()
        properties = {"resource": resource}
        endpoint = f"sarest{collection_url}"

        api_class = api_decorator(type(f"{name}_API", (SARestCollectionAPI,), properties))
        sarest.log.info(f"Exposing {name} on {collection_url}, endpoint: {endpoint}")
        self.add_resource(api_class, collection_url, endpoint=endpoint)

        api_class = api_decorator(type(f"{name}_API_i", (SARestInstanceAPI,), properties))
        sarest.log.info(f"Exposing {name} instances on {instance_url}, endpoint: {endpoint}_i")
        self.add_resource(api_class, instance_url, endpoint=f"{endpoint}_i")

        self.exposed_resources.append(resource)


def api_decorator(cls):
    """Decorator for the API views: add generic exception handling to the http methods

    :param cls: The class that will be decorated (SARestCollectionAPI or SARestInstanceAPI subclass)
    :return: decorated class
    """
    for method_name in [m.lower() for m in HTTP_METHODS]:
        method = getattr(cls, method_name, None)
        if not method:
            continue
        setattr(cls, method_name, http_method_decorator(method))
    return cls


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the supported HTTP methods (get, post, put, delete)
    - commit the database
    - convert all exceptions to a JSON error response

    This method will be called for all requests
    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(view, *args, **kwargs):
        """Wrap the method and perform error handling
        :param view: SARestView instance
        :return: result of the wrapped method
        """
        resource = view.resource
        try:
            result = fun(view, *args, **kwargs)
            resource.store.commit()
            return result

        except Exception as exc:
            error = classify(exc, resource.schema)
            if error.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
                sarest.log.exception(exc)

        resource.store.rollback()
        return error_response(error)

    return method_wrapper


def initialize(app: Flask, db=None, url_prefix: str = "", **kwargs) -> SARestAPI:
    """
    Bind sarest to a Flask app and a Flask-SQLAlchemy db

        api = initialize(app=app, db=db)
        api.resource(model=User, endpoints=["/users", "/users/:id"])

    :return: SARestAPI
    """
    return SARestAPI(app, db=db, url_prefix=url_prefix, **kwargs)
