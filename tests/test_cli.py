import argparse
import asyncio
import json

import httpx
import pytest

import cli


def make_args(tmp_path, **overrides):
    values = dict(
        command="resolve",
        urls=[],
        input=None,
        output=str(tmp_path / "chains.csv"),
        max_chain_length=None,
        concurrency=None,
        lenient=False,
        no_head_domain=[],
        summary_json=str(tmp_path / "summary.json"),
        log_file=None,
        verbose=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def handler(request):
    if request.url.host == "short.example":
        return httpx.Response(301, headers={"Location": "https://dest.example/page"})
    if request.url.host == "broken.example":
        return httpx.Response(500)
    return httpx.Response(200)


def test_resolve_writes_csv_and_summary(tmp_path, monkeypatch):
    input_path = tmp_path / "urls.csv"
    input_path.write_text("url\nhttps://short.example/a\nhttps://broken.example/\nnot a url\n")
    args = make_args(tmp_path, urls=["https://dest.example/page"], input=str(input_path))

    monkeypatch.setattr(cli, "configure_logging", lambda *_, **__: None)

    rows = asyncio.run(cli.resolve_command(args, transport=httpx.MockTransport(handler)))

    assert [row.status for row in rows] == ["ok", "ok", "failed", "invalid"]
    assert rows[1].chain == ["https://short.example/a", "https://dest.example/page"]

    summary = json.loads((tmp_path / "summary.json").read_text())
    assert summary == {"resolved": 2, "redirected": 1, "truncated": 0, "failed": 1, "invalid": 1}

    lines = (tmp_path / "chains.csv").read_text().splitlines()
    assert len(lines) == 5
    assert "https://short.example/a -> https://dest.example/page" in lines[2]


def test_no_head_domain_flag_skips_head(tmp_path, monkeypatch):
    methods = []

    def recording_handler(request):
        methods.append(request.method)
        return httpx.Response(200)

    args = make_args(tmp_path, urls=["https://files.example/x"], no_head_domain=["files.example"])
    monkeypatch.setattr(cli, "configure_logging", lambda *_, **__: None)

    asyncio.run(cli.resolve_command(args, transport=httpx.MockTransport(recording_handler)))

    assert methods == ["GET"]


def test_validate_command_exit_code(capsys):
    args = argparse.Namespace(command="validate", urls=["https://example.com", "not a url"])
    assert cli.validate_command(args) == 1
    out = capsys.readouterr().out
    assert "valid\thttps://example.com" in out
    assert "invalid\tnot a url" in out


def test_bad_location_does_not_abort_the_batch(tmp_path, monkeypatch):
    def mixed_handler(request):
        if request.url.host == "mail.example":
            return httpx.Response(302, headers={"Location": "mailto:x@y.z"})
        return httpx.Response(200)

    args = make_args(tmp_path, urls=["https://mail.example/", "https://fine.example/"])
    monkeypatch.setattr(cli, "configure_logging", lambda *_, **__: None)

    rows = asyncio.run(cli.resolve_command(args, transport=httpx.MockTransport(mixed_handler)))

    assert [row.status for row in rows] == ["failed", "ok"]
    assert (tmp_path / "chains.csv").exists()
    summary = json.loads((tmp_path / "summary.json").read_text())
    assert summary["failed"] == 1
    assert summary["resolved"] == 1


def test_zero_max_chain_length_is_rejected(tmp_path, monkeypatch):
    args = make_args(tmp_path, urls=["https://fine.example/"], max_chain_length=0)
    monkeypatch.setattr(cli, "configure_logging", lambda *_, **__: None)

    with pytest.raises(ValueError):
        asyncio.run(cli.resolve_command(args, transport=httpx.MockTransport(handler)))
