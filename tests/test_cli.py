import json

from constraint_extractor import cli


def test_providers_lists_configured_state(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("COHERE_API_KEY", raising=False)

    code = cli.main(["--settings", str(tmp_path / "none.yaml"), "providers"])

    out = capsys.readouterr().out
    assert code == 0
    assert "- OpenAI: OPENAI_API_KEY (configured)" in out
    assert "- Cohere: COHERE_API_KEY (missing)" in out


def test_analyze_prints_json(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    source = tmp_path / "input.txt"
    source.write_text("Books must have a title.", encoding="utf-8")
    seen = {}

    def fake_run(provider_name, input_text, *, mode, config):
        seen.update(provider=provider_name, text=input_text, mode=mode)
        return {"constraints": [{"text": "Books must have a title"}]}

    monkeypatch.setattr(cli, "run_analysis", fake_run)

    code = cli.main(
        ["--settings", str(tmp_path / "none.yaml"), "analyze", "--provider", "OpenAI", "--mode", "simple", "--input", str(source)]
    )

    assert code == 0
    assert seen == {"provider": "OpenAI", "text": "Books must have a title.", "mode": "simple"}
    assert json.loads(capsys.readouterr().out) == {"constraints": [{"text": "Books must have a title"}]}


def test_analyze_reports_errors(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.delenv("XAI_API_KEY", raising=False)
    source = tmp_path / "input.txt"
    source.write_text("x", encoding="utf-8")

    code = cli.main(["--settings", str(tmp_path / "none.yaml"), "analyze", "--provider", "xAI (Grok)", "--input", str(source)])

    assert code == 1
    assert "xAI (Grok) API key not configured" in capsys.readouterr().err
