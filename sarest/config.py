# Configuration settings should be set in app.config
# The SARest class attributes hold the defaults, environment variables are used as a last resort
import os
import logging
from flask import current_app
import sarest
from typing import Any, Optional


def get_config(option: str) -> Optional[Any]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # KeyError: not configured in the app, RuntimeError: working outside of app context
        result = getattr(sarest.SARest, option, os.environ.get(option, None))
    return result


def get_int_config(option: str) -> Optional[int]:
    """
    :param option: configuration parameter
    :return: the configuration value converted to int, None if not set
    """
    result = get_config(option)
    if result is None or result == "":
        return None
    return int(result)


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return sarest.log.getEffectiveLevel() < logging.INFO
