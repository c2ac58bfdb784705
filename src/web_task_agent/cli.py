"""Command line interface for web-task-agent."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from .agent.runner import AgentRunner
from .config import load_config
from .factory import build_llm, build_toolset, build_transcript

app = typer.Typer(help="Natural-language browser automation agent")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("web-task-agent"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def run(
    task: Annotated[
        Optional[str],
        typer.Option("--task", help="Task description. Prompted for when omitted."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option(
            "--env-file",
            help="Path to an .env file with default configuration values.",
        ),
    ] = None,
    llm_provider: Annotated[
        Optional[str],
        typer.Option("--llm-provider", help="LLM provider to use."),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", help="LLM model identifier."),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="API key for the LLM provider."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
    max_steps: Annotated[
        Optional[int],
        typer.Option("--max-steps", help="Maximum number of model calls."),
    ] = None,
) -> None:
    """Run a browser automation task."""

    overrides: dict[str, Any] = {}
    if task:
        overrides["task"] = {"description": task}
    if any([llm_provider, model, api_key]):
        overrides.setdefault("llm", {})
        if llm_provider:
            overrides["llm"]["provider"] = llm_provider
        if model:
            overrides["llm"]["model"] = model
        if api_key:
            overrides["llm"]["api_key"] = api_key
    if headless is not None:
        overrides["browser"] = {"headless": headless}
    if max_steps is not None:
        overrides["max_steps"] = max_steps

    config = load_config(config_path, env_file=env_file, **overrides)
    description = (
        config.task.description
        if config.task
        else typer.prompt("Enter your web automation task")
    )

    llm = build_llm(config.llm)
    try:
        runner = AgentRunner(
            config=config,
            llm=llm,
            toolset=build_toolset(config.browser),
            transcript=build_transcript(),
        )
        result = runner.run(description)
    finally:
        llm.close()
    if not result.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
