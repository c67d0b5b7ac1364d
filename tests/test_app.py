import json
import socket
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import patch

import pytest
from starlette.testclient import TestClient

from qanda.app import create_app, create_hello_app, fetch, main
from qanda.store import Store
from qanda.types import Question

ORIGIN = "https://app.example.com"


@pytest.fixture
def question():
    return Question(id="1", title="First Question", content="Content of Question", tags=["faq"])


@pytest.fixture
def client(question):
    return TestClient(create_app(Store({question.id: question})))


class _Hello(BaseHTTPRequestHandler):
    def do_GET(self):
        body = b"m+z-cycles"
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def hello_url():
    server = HTTPServer(("127.0.0.1", 0), _Hello)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/"
    server.shutdown()
    server.server_close()


def test_app_lists_questions(client, question):
    response = client.get("/questions")
    assert response.json() == [question.to_dict()]


def test_app_default_store_is_empty():
    response = TestClient(create_app()).get("/questions")
    assert response.json() == []


def test_app_unknown_route_is_not_found(client):
    response = client.get("/nowhere")
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_app_wrong_method_is_not_found(client):
    response = client.patch("/questions")
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_app_api_error_reply(client):
    response = client.get("/questions/99")
    assert response.status_code == HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE
    assert response.text == "Question not found"


def test_cors_preflight_allowed(client):
    response = client.options(
        "/questions/1",
        headers={
            "Origin": ORIGIN,
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert response.status_code == HTTPStatus.OK
    assert response.headers["access-control-allow-origin"] == ORIGIN
    assert "PUT" in response.headers["access-control-allow-methods"]


def test_cors_preflight_method_forbidden(client):
    response = client.options(
        "/questions",
        headers={"Origin": ORIGIN, "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.text.startswith("CORS request forbidden: ")


def test_cors_preflight_header_forbidden(client):
    response = client.options(
        "/questions/1",
        headers={
            "Origin": ORIGIN,
            "Access-Control-Request-Method": "DELETE",
            "Access-Control-Request-Headers": "x-custom",
        },
    )
    assert response.status_code == HTTPStatus.FORBIDDEN


def test_cors_simple_request_gets_origin(client, question):
    response = client.get("/questions", headers={"Origin": ORIGIN})
    assert response.headers["access-control-allow-origin"] == ORIGIN
    assert response.json() == [question.to_dict()]


def test_hello_app_answers_any_path():
    client = TestClient(create_hello_app())
    assert client.get("/").text == "m+z-cycles"
    assert client.get("/some/where").text == "m+z-cycles"


def test_hello_app_custom_message_and_get_only():
    client = TestClient(create_hello_app("hi there"))
    assert client.get("/").text == "hi there"
    assert client.post("/").status_code == HTTPStatus.METHOD_NOT_ALLOWED


def test_fetch_returns_response(hello_url, capsys):
    response = fetch(hello_url)
    assert response.status_code == HTTPStatus.OK
    assert response.text == "m+z-cycles"
    assert hello_url in capsys.readouterr().out


def test_main_fetch(hello_url, capsys):
    assert main(["fetch", "--url", hello_url]) == 0
    assert "status: 200" in capsys.readouterr().out


def test_main_fetch_connection_refused():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    assert main(["fetch", "--url", f"http://127.0.0.1:{port}/"]) == 1


def test_main_serve_loads_questions(tmp_path, question):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps({question.id: question.to_dict()}), encoding="utf-8")
    with patch("uvicorn.run") as run:
        assert main(["serve", "--questions", str(path), "--port", "4040"]) == 0
    app = run.call_args.args[0]
    assert run.call_args.kwargs == {"host": "127.0.0.1", "port": 4040}
    assert TestClient(app).get("/questions").json() == [question.to_dict()]


def test_main_serve_default_port():
    with patch("uvicorn.run") as run:
        assert main([]) == 0
    assert run.call_args.kwargs["port"] == 3030


def test_main_hello_default_port():
    with patch("uvicorn.run") as run:
        assert main(["hello"]) == 0
    assert run.call_args.kwargs["port"] == 1337
    assert TestClient(run.call_args.args[0]).get("/").text == "m+z-cycles"


def test_main_serve_bad_questions_file(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with patch("uvicorn.run") as run:
        assert main(["--questions", str(path)]) == 1
    assert run.call_count == 0