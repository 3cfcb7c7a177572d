import pytest
from flask import Flask
import sarest
from models import db, User

USERS = [
    {"username": "arthur", "email": "arthur@gmail.com"},
    {"username": "james", "email": "james@gmail.com"},
    {"username": "henry", "email": "henry@gmail.com"},
    {"username": "william", "email": "william@gmail.com"},
    {"username": "edward", "email": "edward@gmail.com"},
    {"username": "arthur", "email": "aaaaarthur@gmail.com"},
]


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", TESTING=True)
    db.init_app(app)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def api(app):
    api = sarest.initialize(app=app, db=db)
    api.resource(model=User, endpoints=["/users", "/users/:id"])
    return api


@pytest.fixture
def client(app, api):
    return app.test_client()


@pytest.fixture
def users(client):
    """
    Create the USERS records, in order
    """
    for data in USERS:
        response = client.post("/users", json=data)
        assert response.status_code == 201
    return USERS


def without_id(records):
    return [{k: v for k, v in record.items() if k != "id"} for record in records]
