import json

import pytest
from fastapi.testclient import TestClient

import main
from command.factory import ResponderRegistry, register_builtin_responders


@pytest.fixture
def client(monkeypatch, price_source):
    registry = register_builtin_responders(ResponderRegistry(main.config), price_source, main.config)
    registry.freeze()
    monkeypatch.setattr(main, "registry", registry)
    monkeypatch.setattr(main, "user_map", {})
    monkeypatch.setattr(main, "current_users", set())
    return TestClient(main.app)


def receive(ws):
    return json.loads(ws.receive_text())


def join(ws, username):
    ws.send_text(username)
    userlist = receive(ws)
    welcome = receive(ws)
    return userlist, welcome


def test_root_lists_responders(client):
    response = client.get("/")

    assert response.json()["responders"] == ["TickerResponder", "HelpResponder"]


def test_help_endpoint(client):
    body = client.get("/api/help").json()

    assert body["success"] is True
    assert body["help"] == main.registry.help()


def test_join_and_price_command(client):
    with client.websocket_connect("/ws") as ws:
        userlist, welcome = join(ws, "alice")
        assert userlist["type"] == "userlist"
        assert userlist["users"] == ["alice"]
        assert welcome["text"] == "Welcome, alice!"

        ws.send_text("$price BTC")
        reply = receive(ws)

        assert reply["type"] == "info"
        assert reply["text"] == "123.45"
        assert reply["responder"] == "TickerResponder"


def test_empty_username_rejected(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("   ")
        reply = receive(ws)

        assert reply["type"] == "error"
        assert reply["text"] == "Username cannot be empty."


def test_taken_username_rejected(client):
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        join(first, "alice")
        second.send_text("alice")

        assert receive(second)["text"] == "Username already taken. Choose another."


def test_unknown_command_reports_error(client):
    with client.websocket_connect("/ws") as ws:
        join(ws, "alice")
        ws.send_text("$price")

        reply = receive(ws)

        assert reply["type"] == "error"
        assert "$help" in reply["text"]


def test_plain_chat_is_broadcast(client):
    with client.websocket_connect("/ws") as ws:
        join(ws, "alice")
        ws.send_text("hello everyone")

        reply = receive(ws)

        assert reply["type"] == "message"
        assert reply["text"] == "alice: hello everyone"


def test_source_failure_reported_as_fragment(client, monkeypatch, failing_source):
    registry = register_builtin_responders(ResponderRegistry(main.config), failing_source, main.config)
    monkeypatch.setattr(main, "registry", registry)

    with client.websocket_connect("/ws") as ws:
        join(ws, "alice")
        ws.send_text("$allPrices")

        reply = receive(ws)

        assert reply["type"] == "info"
        assert "service down" in reply["text"]
