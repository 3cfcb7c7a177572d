# sarest to json encoding

import datetime
import decimal
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import sarest
from .config import is_debug


class _SARestJSONEncoder:
    """
    JSON encoding for the attribute values that are not natively supported by json
    """

    # pylint: disable=too-many-return-statements
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if obj is None:
            return None
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            sarest.log.debug("SARestJSONEncoder: serializing bytes obj")
            return obj.hex()
        if hasattr(obj, "to_dict"):
            return obj.to_dict()

        # We shouldn't get here in a normal setup
        if not is_debug():
            sarest.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
            return {"error": "SARestJSONEncoder invalid object"}

        return str(obj)


class SARestJSONProvider(_SARestJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding, keys are kept in the attribute declaration order
    """

    sort_keys = False
