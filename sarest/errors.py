# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions will be caught in http_method_decorator and formatted, for example:
# {
#      "error": "Validation Error",
#      "message": "Validation Error: invalid user",
#      "errors": [{"field": "email", "message": "must be a valid email"}]
# }
#
from http import HTTPStatus
from sqlalchemy.exc import DontWrapMixin
import sarest
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class SARestError(Exception, DontWrapMixin):
    """
    Base class of the errors that are converted to an http response
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    title = HTTPStatus.INTERNAL_SERVER_ERROR.phrase
    message = ""

    def __init__(self, message=""):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        """
        :return: json serializable error body
        """
        return {"error": self.title, "message": self.message}


class ConfigurationError(SARestError):
    """
    This exception is raised when a resource can't be registered, e.g. when no model was specified
    It is raised at startup, not while handling a request
    """

    title = "Configuration Error"

    def __eq__(self, other):
        return type(self) is type(other) and self.message == other.message

    __hash__ = SARestError.__hash__


class NotFoundError(SARestError):
    """
    This exception is raised when an item was not found
    """

    status_code = HTTPStatus.NOT_FOUND.value
    title = HTTPStatus.NOT_FOUND.phrase

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        """
        super().__init__(message or "Not Found")
        self.status_code = status_code
        sarest.log.error("Not found: %s", message)


class ValidationError(SARestError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message and the field errors to the client in the response

    `errors` holds the ValidationFailure items, in the order the fields were validated
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    title = "Validation Error"

    def __init__(self, message="", errors=None, status_code=HTTPStatus.BAD_REQUEST.value):
        super().__init__(message or "Validation error")
        self.status_code = status_code
        self.errors = list(errors or [])
        sarest.log.warning("ValidationError: %s %s", self.message, [str(failure) for failure in self.errors])

    def to_dict(self):
        result = super().to_dict()
        result["errors"] = [failure.to_dict() for failure in self.errors]
        return result


class QuerySpecError(SARestError):
    """
    This exception is raised when the list query arguments can't be executed:
    malformed pagination values or an unknown sort attribute.
    These are structural errors: they result in a 500 response, unknown filter attributes are simply ignored
    """

    title = "Query Error"

    def __init__(self, message=""):
        super().__init__(message)
        sarest.log.error("Query Error: %s", message)


class GenericError(SARestError):
    """
    This exception is raised when an unexpected error has been detected
    The details are only shown to the client in debug mode
    """

    title = "Generic Error"

    def __init__(self, message="", status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        super().__init__(str(message) if is_debug() else HIDDEN_LOG)
        self.status_code = status_code
        sarest.log.error("%s: %s", self.title, message)


class StoreQueryError(GenericError):
    """
    This exception is raised when the store failed to execute a query
    """

    title = "Store Query Error"
