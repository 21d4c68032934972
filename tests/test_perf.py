import json

import pytest

from lib.perf import PerfLogger


@pytest.fixture
def log() -> PerfLogger:
    p = PerfLogger()
    p.start()
    return p


def test_stage_boundaries_are_recorded(log) -> None:
    log.stage("startup")
    log.stage("play")
    log.finish()
    ops = [(e.stage, e.operation) for e in log.events]
    assert ops == [
        ("startup", "stage_start"),
        ("startup", "stage_end"),
        ("play", "stage_start"),
        ("play", "stage_end"),
    ]


def test_timer_records_success_with_meta(log) -> None:
    log.stage("play")
    with log.timer("cast_frame", columns=320):
        pass
    ev = log.events[-1]
    assert ev.operation == "cast_frame"
    assert ev.success
    assert ev.meta == {"columns": 320}
    assert ev.duration_ms >= 0


def test_timer_records_failure_and_reraises(log) -> None:
    with pytest.raises(RuntimeError):
        with log.timer("cast_frame"):
            raise RuntimeError("ray escaped")
    ev = log.events[-1]
    assert not ev.success
    assert ev.error == "RuntimeError: ray escaped"


def test_save_writes_jsonl(log, tmp_path) -> None:
    log.stage("play")
    log.event("cast_frame", 1.5, columns=320)
    log.finish()
    path = log.save(str(tmp_path / "runs"))

    with open(path) as f:
        rows = [json.loads(line) for line in f]
    assert len(rows) == 3
    assert rows[1]["operation"] == "cast_frame"
    assert rows[1]["columns"] == 320
    assert rows[1]["duration_ms"] == 1.5


def test_summary_prints_without_error(log, capsys) -> None:
    log.stage("play")
    log.event("cast_frame", 2.0)
    log.event("cast_frame", 4.0, success=False, error="boom")
    log.finish()
    log.summary()


def test_reset_clears_events(log) -> None:
    log.event("present", 0.1)
    log.reset()
    assert log.events == []


def test_disabled_logger_records_nothing() -> None:
    p = PerfLogger()
    p.start(enabled=False)
    p.stage("play")
    with p.timer("cast_frame", columns=320):
        pass
    p.event("present", 0.2)
    p.finish()
    assert p.events == []
