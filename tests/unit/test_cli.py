import pytest
from typer.testing import CliRunner

import tagsteps.gateway as gateway_module
import tagsteps.persistence as persistence
from tagsteps.cli import app
from tagsteps.gateway import InMemoryElement, InMemoryGateway
from tagsteps.persistence import Instance, InMemoryInstanceRepository


@pytest.fixture(autouse=True)
def backends(tmp_path, monkeypatch):
    monkeypatch.setenv("TAGSTEPS_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("TAGSTEPS_GATEWAY", raising=False)
    monkeypatch.delenv("TAGSTEPS_DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    repo = InMemoryInstanceRepository()
    gateway = InMemoryGateway()
    monkeypatch.setattr(persistence, "_repository_instance", repo)
    monkeypatch.setattr(gateway_module, "_gateway_instance", gateway)
    return repo, gateway


def test_step_run_monitoring(backends):
    repo, gateway = backends
    repo.create_instance(Instance(id="ch-1", status="ready"))
    element = gateway.add_element(InMemoryElement("TAG 1"))
    element.tables[240] = [["7", "", "", "", "", "", "", "News*"]]

    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "step",
            "run",
            "update-monitoring-state",
            "-p",
            "InstanceId=ch-1",
            "-p",
            "TAG Element=TAG 1",
            "-p",
            "Channel Name=News",
            "-p",
            "Channel Match=News*",
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "continue (signal: success)" in result.stdout
    assert repo.read_by_id("ch-1").status == "in_progress"
    assert element.keyed_parameters[356] == {"7": 1}


def test_step_run_error_exit_code(backends, tmp_path):
    params = tmp_path / "params.yaml"
    params.write_text("InstanceId: ghost\nTAG Element: TAG 1\nChannel Name: News\nChannel Match: News*\n")

    result = CliRunner().invoke(
        app, ["step", "run", "update-monitoring-state", "--params-file", str(params)]
    )

    assert result.exit_code == 1
    assert "error (signal: error)" in result.stdout


def test_step_run_unknown_step():
    result = CliRunner().invoke(app, ["step", "run", "nope"])
    assert result.exit_code == 1
    assert "Unknown step" in result.stdout


def test_step_list():
    result = CliRunner().invoke(app, ["step", "list"])
    assert "deactivate-scanner" in result.stdout
    assert "update-monitoring-state" in result.stdout


def test_instance_commands(backends):
    runner = CliRunner()

    result = runner.invoke(app, ["instance", "list"])
    assert "No instances found" in result.stdout

    result = runner.invoke(
        app, ["instance", "create", "scan-1", "--status", "deactivate", "--definition", "scan"]
    )
    assert result.exit_code == 0

    result = runner.invoke(app, ["instance", "transition", "scan-1", "deactivate_to_deactivating"])
    assert result.exit_code == 0
    assert "deactivating" in result.stdout

    result = runner.invoke(app, ["instance", "transition", "scan-1", "ready_to_inprogress"])
    assert result.exit_code == 1

    result = runner.invoke(app, ["instance", "show", "scan-1"])
    assert result.exit_code == 0
    assert "deactivate_to_deactivating: deactivate -> deactivating" in result.stdout

    result = runner.invoke(app, ["instance", "show", "missing"])
    assert result.exit_code == 1
    assert "Instance not found" in result.stdout
