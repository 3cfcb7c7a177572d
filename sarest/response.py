# Response class and response composition
#
# - list: 200, json array, Content-Range: items {start}-{end}/{total}
# - read/update: 200, json object
# - create: 201, json object, Location header
# - delete: 200, empty json object
# - errors: status code of the error, {"error": ..., "message": ..., ["errors": [{"field":.., "message":..}]]}
#
from http import HTTPStatus
from flask import Response, jsonify, make_response

CONTENT_RANGE = "Content-Range"


class SARestResponse(Response):
    """
    Response class
    """

    default_mimetype = "application/json"


def list_response(page, schema):
    """
    :param page: ResultPage
    :param schema: ModelSchema used to serialize the records
    """
    response = make_response(jsonify([schema.to_dict(record) for record in page.records]), HTTPStatus.OK)
    response.headers[CONTENT_RANGE] = page.content_range
    return response


def entity_response(instance, schema, status_code=HTTPStatus.OK):
    return make_response(jsonify(schema.to_dict(instance)), status_code)


def created_response(instance, schema, location):
    """
    :param location: url of the newly created instance
    """
    response = entity_response(instance, schema, HTTPStatus.CREATED)
    response.headers["Location"] = location
    return response


def deleted_response():
    return make_response(jsonify({}), HTTPStatus.OK)


def error_response(error):
    """
    :param error: SARestError instance
    """
    return make_response(jsonify(error.to_dict()), error.status_code)
