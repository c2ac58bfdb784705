from __future__ import annotations

from typer.testing import CliRunner

from web_task_agent.agent.runner import AgentResult
from web_task_agent.cli import app
from web_task_agent.config import RunnerConfig


def _base_config(task: str | None = "CLI test task") -> RunnerConfig:
    data: dict[str, object] = {"llm": {"provider": "mock"}, "browser": {"headless": True}}
    if task:
        data["task"] = {"description": task}
    return RunnerConfig.model_validate(data)


def _make_runner(state: dict[str, object], success: bool):
    class DummyRunner:
        def __init__(self, **kwargs):
            state.update(kwargs)
            state["tasks"] = []

        def run(self, task: str) -> AgentResult:
            state["tasks"].append(task)
            return AgentResult(success=success, summary="ok")

    return DummyRunner


class StubLLM:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


def _patch_builders(monkeypatch, calls: dict[str, list[object]]) -> StubLLM:
    llm = StubLLM()

    def _capture(name: str, product: object):
        def _factory(*args: object) -> object:
            calls.setdefault(name, []).append(args)
            return product

        return _factory

    monkeypatch.setattr("web_task_agent.cli.build_llm", _capture("llm", llm))
    monkeypatch.setattr("web_task_agent.cli.build_toolset", _capture("toolset", "toolset-stub"))
    monkeypatch.setattr(
        "web_task_agent.cli.build_transcript", _capture("transcript", "transcript-stub")
    )
    return llm


def test_run_command_passes_overrides(monkeypatch, tmp_path):
    runner = CliRunner()
    config_path = tmp_path / "config.yaml"
    config_path.write_text("max_steps: 3\n")
    env_file = tmp_path / "vars.env"
    env_file.write_text("TOKEN=test\n")

    config = _base_config()
    load_args: dict[str, object] = {}

    def fake_load_config(path, *, env_file=None, **overrides):  # type: ignore[no-untyped-def]
        load_args["path"] = path
        load_args["env_file"] = env_file
        load_args["overrides"] = overrides
        return config

    monkeypatch.setattr("web_task_agent.cli.load_config", fake_load_config)
    builder_calls: dict[str, list[object]] = {}
    llm = _patch_builders(monkeypatch, builder_calls)
    state: dict[str, object] = {}
    monkeypatch.setattr("web_task_agent.cli.AgentRunner", _make_runner(state, success=True))

    result = runner.invoke(
        app,
        [
            "run",
            "--config",
            str(config_path),
            "--env-file",
            str(env_file),
            "--task",
            "Find the docs",
            "--llm-provider",
            "openai",
            "--model",
            "gpt-test",
            "--api-key",
            "secret",
            "--headless",
            "--max-steps",
            "9",
        ],
    )

    assert result.exit_code == 0
    assert load_args["path"] == config_path
    assert load_args["env_file"] == env_file
    overrides = load_args["overrides"]
    assert overrides["task"] == {"description": "Find the docs"}
    assert overrides["llm"] == {"provider": "openai", "model": "gpt-test", "api_key": "secret"}
    assert overrides["browser"] == {"headless": True}
    assert overrides["max_steps"] == 9

    assert builder_calls["llm"] == [(config.llm,)]
    assert builder_calls["toolset"] == [(config.browser,)]
    assert builder_calls["transcript"] == [()]
    assert state["config"] is config
    assert state["llm"] is llm
    assert llm.closed is True
    assert state["toolset"] == "toolset-stub"
    assert state["transcript"] == "transcript-stub"
    assert state["tasks"] == ["CLI test task"]


def test_run_command_prompts_for_missing_task(monkeypatch):
    runner = CliRunner()
    monkeypatch.setattr("web_task_agent.cli.load_config", lambda *_, **__: _base_config(task=None))
    _patch_builders(monkeypatch, {})
    state: dict[str, object] = {}
    monkeypatch.setattr("web_task_agent.cli.AgentRunner", _make_runner(state, success=True))

    result = runner.invoke(app, ["run"], input="Book a table\n")

    assert result.exit_code == 0
    assert "Enter your web automation task" in result.stdout
    assert state["tasks"] == ["Book a table"]


def test_run_command_failure(monkeypatch):
    runner = CliRunner()
    monkeypatch.setattr("web_task_agent.cli.load_config", lambda *_, **__: _base_config())
    llm = _patch_builders(monkeypatch, {})
    state: dict[str, object] = {}
    monkeypatch.setattr("web_task_agent.cli.AgentRunner", _make_runner(state, success=False))

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert state["tasks"] == ["CLI test task"]
    assert llm.closed is True


def test_version_command():
    result = CliRunner().invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.strip()
