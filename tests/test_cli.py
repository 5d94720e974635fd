"""
Tests for the command line interface
"""

from datetime import datetime, timezone

from typer.testing import CliRunner

from studioflow import __version__
from studioflow.cli import _run_step, app
from studioflow.errors import TransientServiceFailure
from studioflow.models import Project, Step
from studioflow.store import YamlProjectStore
from studioflow.workflow import WorkflowController

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_projects_empty(tmp_path):
    result = runner.invoke(app, ["projects", "--store", str(tmp_path / "projects.yaml")])

    assert result.exit_code == 0
    assert "You have no saved projects. Create one and save it!" in result.output


def test_projects_lists_newest_first(tmp_path):
    path = tmp_path / "projects.yaml"
    store = YamlProjectStore(path)
    store.append(Project(
        id="old", created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
        topic="Older topic", title="Older title",
    ))
    store.append(Project(
        id="new", created_at=datetime(2025, 4, 2, tzinfo=timezone.utc),
        topic="Newer topic", title="",
    ))

    result = runner.invoke(app, ["projects", "--store", str(path)])

    assert result.exit_code == 0
    assert "2 saved project(s)" in result.output
    assert result.output.index("Untitled Project") < result.output.index("Older title")
    assert "Topic: Newer topic" in result.output
    assert "Saved on: 2025-04-02" in result.output


def test_create_requires_api_key(monkeypatch, tmp_path):
    monkeypatch.setattr("studioflow.cli.config.gemini_api_key", "")

    result = runner.invoke(app, ["create", "--store", str(tmp_path / "p.yaml")])

    assert result.exit_code == 1
    assert "GEMINI_API_KEY not set" in result.output


def _metadata_review_controller(gateway, store):
    controller = WorkflowController(gateway=gateway, store=store)
    controller.suggest()
    controller.select(0)
    controller.generate_script()
    controller.proceed()
    return controller


def _accept_defaults(monkeypatch):
    prompts = []

    def prompt(text, default=None, **kwargs):
        prompts.append((text, default))
        return default

    monkeypatch.setattr("studioflow.cli.typer.prompt", prompt)
    return prompts


def test_metadata_step_defaults_to_regenerate_when_missing(monkeypatch, gateway, store, tmp_path):
    gateway.generate_metadata.side_effect = [TransientServiceFailure(), gateway.generate_metadata.return_value]
    controller = _metadata_review_controller(gateway, store)
    assert controller.state.metadata is None
    prompts = _accept_defaults(monkeypatch)

    assert _run_step(controller, tmp_path)

    assert prompts[0][1] == "r"
    assert gateway.generate_metadata.call_count == 2
    assert controller.step is Step.METADATA_REVIEW
    assert controller.state.metadata is not None
    gateway.generate_thumbnail.assert_not_called()


def test_metadata_step_defaults_to_thumbnail(monkeypatch, gateway, store, tmp_path):
    controller = _metadata_review_controller(gateway, store)
    prompts = _accept_defaults(monkeypatch)

    assert _run_step(controller, tmp_path)

    assert prompts[0][1] == "t"
    assert controller.step is Step.THUMBNAIL
