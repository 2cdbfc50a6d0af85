"""
Tests for the append-only job table.
"""

from __future__ import annotations

import subprocess
import sys

from minishell.errors import ShellError
from minishell.jobs import Job, JobTable


def _spawn(code: str) -> subprocess.Popen:
    return subprocess.Popen([sys.executable, "-c", code])


def test_add_until_full():
    table = JobTable(capacity=2)

    assert table.add(101, "a") is ShellError.OK
    assert table.add(102, "b") is ShellError.OK
    assert table.add(103, "c") is ShellError.JOB_CONTROL_FULL

    assert [job.label for _, job in table.entries()] == ["a", "b"]


def test_add_requires_label():
    table = JobTable(capacity=2)

    assert table.add(101, "") is ShellError.NULL_POINTER
    assert table.add(101, None) is ShellError.NULL_POINTER
    assert len(table) == 0


def test_new_job_is_running():
    table = JobTable(capacity=1)
    table.add(101, "sleep")

    slot, job = table.entries()[0]
    assert slot == 1
    assert job.running is True
    assert job.status == "Running"


def test_refresh_marks_exited_job_done_exactly_once():
    table = JobTable(capacity=2)
    proc = _spawn("pass")
    table.add(proc.pid, "python", process=proc)
    proc.wait(timeout=10)

    notices: list[str] = []
    table.refresh(notices.append)

    assert notices == ["[1] Done: python\n"]
    assert table.entries()[0][1].running is False

    table.refresh(notices.append)
    assert notices == ["[1] Done: python\n"]


def test_refresh_leaves_running_job_alone():
    table = JobTable(capacity=2)
    proc = _spawn("import time; time.sleep(30)")
    try:
        table.add(proc.pid, "sleeper", process=proc)

        notices: list[str] = []
        table.refresh(notices.append)

        assert notices == []
        assert table.entries()[0][1].running is True
    finally:
        proc.kill()
        proc.wait(timeout=10)


def test_refresh_keeps_spawn_slot_index():
    table = JobTable(capacity=3)
    sleeper = _spawn("import time; time.sleep(30)")
    quick = _spawn("pass")
    try:
        table.add(sleeper.pid, "sleeper", process=sleeper)
        table.add(quick.pid, "quick", process=quick)
        quick.wait(timeout=10)

        notices: list[str] = []
        table.refresh(notices.append)

        assert notices == ["[2] Done: quick\n"]
    finally:
        sleeper.kill()
        sleeper.wait(timeout=10)


def test_job_without_handle_falls_back_to_waitpid():
    proc = _spawn("pass")
    proc.wait(timeout=10)

    # Already reaped, so waitpid reports no such child.
    job = Job(pid=proc.pid, label="python")
    assert job.poll_exited() is True


def test_finished_jobs_keep_consuming_capacity():
    table = JobTable(capacity=1)
    proc = _spawn("pass")
    table.add(proc.pid, "python", process=proc)
    proc.wait(timeout=10)
    table.refresh(lambda _s: None)

    assert table.add(999, "next") is ShellError.JOB_CONTROL_FULL
    assert len(table) == 1


def test_clear_releases_each_job_once():
    table = JobTable(capacity=2)
    table.add(101, "a")

    assert table.clear() == 1
    assert table.clear() == 0
