import datetime
import decimal
import uuid
import sarest
from sarest.json_encoder import SARestJSONProvider


def test_json_encoding(app) -> None:
    provider = SARestJSONProvider(app)
    value = {
        "b": datetime.date(2020, 1, 31),
        "a": datetime.datetime(2020, 1, 31, 10, 20),
        "amount": decimal.Decimal("1.5"),
        "id": uuid.UUID(int=1),
        "raw": b"\x01",
        "delta": datetime.timedelta(seconds=90),
    }
    assert provider.dumps(value) == (
        '{"b": "2020-01-31", "a": "2020-01-31 10:20:00", "amount": 1.5, '
        '"id": "00000000-0000-0000-0000-000000000001", "raw": "01", "delta": "0:01:30"}'
    )


def test_unknown_type(app, monkeypatch) -> None:
    monkeypatch.setattr(sarest.json_encoder, "is_debug", lambda: False)
    assert SARestJSONProvider(app).dumps(object()) == '{"error": "SARestJSONEncoder invalid object"}'
