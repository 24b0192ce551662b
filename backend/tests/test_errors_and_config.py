from mall_manager.config import Settings
from mall_manager.errors import CapacityExceededError, NotFoundError, ValidationError


def test_validation_error_response_carries_fields():
    exc = ValidationError({"name": ["can't be blank"], "city": ["can't be blank"]})
    body = exc.to_response()["error"]
    assert exc.message == "Name can't be blank, City can't be blank"
    assert body["fields"] == {"name": ["can't be blank"], "city": ["can't be blank"]}
    assert body["category"] == "validation"
    assert exc.http_status == 422


def test_capacity_error_merges_field_errors():
    exc = CapacityExceededError("mall-1", 10, {"name": ["can't be blank"]})
    assert exc.errors == {"name": ["can't be blank"], "capacity": ["too many stores"]}
    assert exc.to_response()["error"]["category"] == "business_rule"


def test_not_found_message():
    exc = NotFoundError("Mall", "abc")
    assert exc.message == "Mall 'abc' not found"
    assert exc.http_status == 404


def test_sqlite_url_derived_from_database_name(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(database="test", database_url=None)
    assert settings.sqlalchemy_url.endswith("db/test.sqlite3")
    assert settings.sqlalchemy_url.startswith("sqlite:///")


def test_database_url_overrides_database_name():
    settings = Settings(database="test", database_url="postgres://u:p@localhost/malls")
    assert settings.sqlalchemy_url == "postgresql://u:p@localhost/malls"


def test_run_serves_app_with_uvicorn(monkeypatch):
    from mall_manager import main

    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    main.run()

    assert calls == [(main.app, {
        "host": main.settings.host,
        "port": main.settings.port,
        "log_level": main.settings.log_level.lower(),
    })]
