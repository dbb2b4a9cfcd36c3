"""Update Monitoring State step tests."""

import pytest

from tagsteps.contracts import OutcomeKind
from tagsteps.process import ProcessContext, ProcessSignal
from tagsteps.reporting import Severity
from tagsteps.steps import UpdateMonitoringStateStep, run_step

CHANNEL_STATUS_TABLE = 240


def _status_row(key, match):
    # column 248 sits at index 7 of table 240
    return [key, "", "", "", "", "", "", match]


def _context(instance_id="ch-1"):
    return ProcessContext(
        {
            "InstanceId": instance_id,
            "TAG Element": "TAG Element 1",
            "Channel Name": "News HD",
            "Channel Match": "News HD*",
            "Monitoring Mode": "Full",
            "Threshold": "80",
        }
    )


@pytest.fixture
def step(repo, gateway, config, reporter):
    return UpdateMonitoringStateStep(repo, gateway, config, reporter)


@pytest.fixture
def channel_rows(element):
    element.tables[CHANNEL_STATUS_TABLE] = [
        _status_row("1", "News HD*"),
        _status_row("2", "News HD*"),
        _status_row("3", "Sports*"),
    ]


def test_ready_moves_to_in_progress(step, repo, element, make_instance, channel_rows):
    make_instance("ch-1", "ready")
    context = _context()

    outcome = run_step(step, context)

    assert outcome.kind == OutcomeKind.CONTINUE
    assert context.signal == ProcessSignal.SUCCESS
    assert repo.requested_transitions == [("ch-1", "ready_to_inprogress")]
    assert repo.read_by_id("ch-1").status == "in_progress"
    assert element.keyed_parameters[356] == {"1": 1, "2": 1}


def test_in_progress_is_idempotent(step, repo, element, make_instance, channel_rows):
    make_instance("ch-1", "in_progress")

    first, second = _context(), _context()
    outcome_1 = run_step(step, first)
    writes_after_first = list(element.writes)
    outcome_2 = run_step(step, second)

    assert outcome_1 == outcome_2
    assert outcome_1.kind == OutcomeKind.CONTINUE
    assert first.signal == second.signal == ProcessSignal.SUCCESS
    assert repo.requested_transitions == []
    assert element.writes == writes_after_first * 2


def test_deactivating_turns_monitoring_off_and_finishes(step, repo, element, make_instance, channel_rows):
    make_instance("ch-1", "deactivating")
    context = _context()

    outcome = run_step(step, context)

    assert outcome.kind == OutcomeKind.FINISH
    assert context.signal == ProcessSignal.FINISH
    assert repo.requested_transitions == [("ch-1", "deactivating_to_complete")]
    assert element.keyed_parameters[356] == {"1": 0, "2": 0}


def test_unknown_status_warns_and_succeeds(step, repo, reporter, make_instance, channel_rows):
    make_instance("ch-1", "frozen")
    context = _context()

    outcome = run_step(step, context)

    assert outcome.kind == OutcomeKind.CONTINUE
    assert context.signal == ProcessSignal.SUCCESS
    assert repo.requested_transitions == []
    assert reporter.codes() == ["InvalidStatusForTransition"]
    assert reporter.logs[0].error_code.severity == Severity.WARNING
    assert "frozen" in reporter.logs[0].error_code.description


def test_no_matching_channels_still_transitions(step, repo, element, reporter, make_instance):
    make_instance("ch-1", "ready")
    context = _context()

    outcome = run_step(step, context)

    assert outcome.kind == OutcomeKind.CONTINUE
    assert element.writes == []
    assert reporter.codes() == ["ChannelNotFound"]
    assert repo.read_by_id("ch-1").status == "in_progress"


def test_missing_instance_is_an_error(step, repo, reporter):
    context = _context("ghost")

    outcome = run_step(step, context)

    assert outcome.kind == OutcomeKind.ERROR
    assert outcome.error_kind == "InstanceNotFoundError"
    assert context.signal == ProcessSignal.ERROR
    assert reporter.logs[0].error_code.severity == Severity.CRITICAL
    assert reporter.logs[0].affected_service == "News HD"


def test_missing_parameters_are_an_error(step):
    context = ProcessContext({"InstanceId": "ch-1"})

    outcome = run_step(step, context)

    assert outcome.kind == OutcomeKind.ERROR
    assert context.signal == ProcessSignal.ERROR
