# tests/test_attendance_stager.py

from core.attendance_stager import AttendanceStager


def test_stage_and_unstage():
    stager = AttendanceStager()
    assert stager.is_empty()

    stager.stage("s1", "حاضر")
    stager.stage("s1", "غائب")
    stager.stage("s2", "حاضر")
    stager.unstage("s2")
    stager.unstage("missing")

    assert stager.pending() == [("s1", "غائب")]


def test_bulk_stage_without_overwrite_keeps_earlier_answers():
    stager = AttendanceStager()
    stager.stage("s1", "غائب")

    stager.bulk_stage(["s1", "s2", "s3"], "حاضر", overwrite=False)

    assert stager.pending() == [("s1", "غائب"), ("s2", "حاضر"), ("s3", "حاضر")]
    assert stager.summary() == {"غائب": 1, "حاضر": 2}


def test_pending_skips_unchanged_statuses():
    stager = AttendanceStager()
    stager.bulk_stage(["s1", "s2", "s3"], "حاضر")

    pending = stager.pending({"s1": "حاضر", "s2": "غائب", "s3": ""})

    assert pending == [("s2", "حاضر"), ("s3", "حاضر")]


def test_clear():
    stager = AttendanceStager()
    stager.stage("s1", "حاضر")

    stager.clear()

    assert stager.is_empty()
