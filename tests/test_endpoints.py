import pytest
from sarest.resource import pluralize, derive_endpoints, to_url_rule, model_base_name
from models import User, Person, Thing


@pytest.mark.parametrize(
    "name, plural",
    [
        ("person", "people"),
        ("user", "users"),
        ("users", "users"),
        ("box", "boxes"),
        ("bus", "buses"),
        ("address", "addresses"),
        ("class", "classes"),
        ("glass", "glasses"),
        ("process", "processes"),
    ],
)
def test_pluralize(name: str, plural: str) -> None:
    assert pluralize(name) == plural


def test_derive_endpoints() -> None:
    assert derive_endpoints(Person) == ("/people", "/people/:id")
    assert derive_endpoints(User) == ("/users", "/users/:id")
    assert derive_endpoints(Thing) == ("/things", "/things/:id")


def test_model_base_name() -> None:
    class Box:
        pass

    assert model_base_name(Box) == "box"
    assert model_base_name(Person) == "person"


def test_url_rule() -> None:
    assert to_url_rule("/users/:id") == "/users/<id>"
    assert to_url_rule("/users/:user_id/") == "/users/<user_id>/"


def test_derive_endpoints_singular_s() -> None:
    class Address:
        pass

    assert derive_endpoints(Address) == ("/addresses", "/addresses/:id")
