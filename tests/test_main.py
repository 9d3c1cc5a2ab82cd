import importlib

from order_core import main


def test_run_serves_the_app_factory(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

    main.run()

    [(target, kwargs)] = calls
    assert kwargs["factory"] is True
    module_name, attr = target.split(":")
    assert getattr(importlib.import_module(module_name), attr) is main.create_app


def test_app_mounts_every_router():
    paths = {route.path for route in main.create_app(create_tables=False).routes}
    assert {"/health", "/orders", "/orders/{order_id}", "/admin/dashboard"} <= paths
