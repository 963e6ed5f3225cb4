import json

from upload_auth import __main__ as entrypoint


def test_refuses_to_run_on_lambda(monkeypatch, tmp_path):
    event_file = tmp_path / "event.json"
    event_file.write_text("{}")
    monkeypatch.setenv("PLATFORM", "lambda")
    assert entrypoint.run([str(event_file)]) == 2


def test_prints_handler_response(monkeypatch, tmp_path, capsys):
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps({"body": "{}"}))
    monkeypatch.setenv("PLATFORM", "local")
    monkeypatch.setattr(entrypoint, "handler", lambda event, context: {"statusCode": 400, "body": "nope"})

    assert entrypoint.run([str(event_file)]) == 1
    assert json.loads(capsys.readouterr().out) == {"statusCode": 400, "body": "nope"}
