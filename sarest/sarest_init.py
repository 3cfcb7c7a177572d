import logging
import os
import sys
from flask import Flask
from .response import SARestResponse
from .json_encoder import SARestJSONProvider
from typing import Any


class SARest:
    """This class holds the default configuration and configures the Flask application
    to serve sarest resources

    :param app: a Flask application.
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables, app.config takes precedence
    MAX_PAGE_LIMIT = 100000
    DEFAULT_PAGE_LIMIT = None  # None: return all matching records when no "count" is given
    MAX_PAGE_OFFSET = 2**31
    RESERVED_PARAMS = ("offset", "count", "sort", "q")
    LOGLEVEL = logging.WARNING

    @staticmethod
    def init_app(app: Flask, **kwargs: Any) -> None:
        """
        Prepare the flask app:
        - request/response classes and json encoding
        - sarest configuration passed as keyword arguments is stored in the app.config
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        app.response_class = SARestResponse
        app.json = SARestJSONProvider(app)
        app.url_map.strict_slashes = False

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            app.config.setdefault(conf_name, conf_val)

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stderr so we redirect everything to sys.stderr
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = SARest.init_logging(LOGLEVEL)
