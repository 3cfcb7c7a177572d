#  This file contains the flask-restful "Resource" objects:
#  - SARestCollectionAPI for the exposed collections (list, create)
#  - SARestInstanceAPI for the exposed instances (read, update, delete)
#
#  The classes are created per exposed model by SARestAPI.expose_resource, with the `resource`
#  class attribute set to the sarest.resource.Resource
#
# pylint: disable=redefined-builtin,invalid-name
from flask import request
from flask_restful import Resource as FRSResource
from .errors import ValidationError
from .response import list_response, entity_response, created_response, deleted_response


class SARestView(FRSResource):
    """
    Superclass for the exposed endpoints
    """

    # resource: the sarest.resource.Resource that will handle the http methods
    resource = None

    @staticmethod
    def get_payload():
        """
        :return: the json request body, None if there's no body
        :raises ValidationError: the body is not valid json
        """
        payload = request.get_json(silent=True)
        if payload is None and request.get_data():
            raise ValidationError("Invalid payload: the request body is not valid json")
        return payload


class SARestCollectionAPI(SARestView):
    """
    GET /users : list the records matching the query arguments
    POST /users : create a record
    """

    def get(self, **kwargs):
        """
        HTTP GET: return the matching instances, the slice is reported in the Content-Range header
        """
        page = self.resource.list(request.args)
        return list_response(page, self.resource.schema)

    def post(self, **kwargs):
        """
        HTTP POST: create an instance, the Location header points to the new instance
        """
        instance = self.resource.create(self.get_payload())
        return created_response(instance, self.resource.schema, self.resource.location(instance))


class SARestInstanceAPI(SARestView):
    """
    GET /users/:id : read
    PUT /users/:id : update
    DELETE /users/:id : delete
    """

    def get(self, **kwargs):
        id = kwargs[self.resource.id_param]
        instance = self.resource.read(id)
        return entity_response(instance, self.resource.schema)

    def put(self, **kwargs):
        """
        HTTP PUT: update the attributes in the body, the other attributes are not modified
        """
        id = kwargs[self.resource.id_param]
        instance = self.resource.update(id, self.get_payload())
        return entity_response(instance, self.resource.schema)

    def delete(self, **kwargs):
        id = kwargs[self.resource.id_param]
        self.resource.delete(id)
        return deleted_response()
