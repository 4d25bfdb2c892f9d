# tests/test_roster.py

import json
import logging

import config
from core.response import ErrorCode
from core.storage import InMemoryStorage
from models.roster import Roster


class FailingStorage(InMemoryStorage):
    def set(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


def stored_students(storage) -> list[dict]:
    return json.loads(storage.get(config.STORAGE_KEY_STUDENTS))


# === load ===


def test_load_uses_seed_when_storage_is_empty(storage):
    roster = Roster.load(storage)

    assert len(roster) == 5
    assert roster.students[2].grade == "السابع"
    assert storage.get(config.STORAGE_KEY_STUDENTS) is None


def test_load_reads_stored_students(storage, sample_student):
    storage.set(config.STORAGE_KEY_STUDENTS, json.dumps([sample_student.to_dict()]))

    roster = Roster.load(storage)

    assert [s.id for s in roster] == ["s001"]


def test_load_empty_stored_list_is_an_empty_roster(storage):
    storage.set(config.STORAGE_KEY_STUDENTS, "[]")

    assert len(Roster.load(storage)) == 0


def test_load_falls_back_to_seed_on_bad_json(storage, caplog):
    storage.set(config.STORAGE_KEY_STUDENTS, "{not json")

    with caplog.at_level(logging.ERROR, logger="models.roster"):
        roster = Roster.load(storage)

    assert len(roster) == 5
    assert "Failed to load students" in caplog.text


def test_load_with_empty_seed_starts_empty(storage):
    assert len(Roster.load(storage, seed_csv="")) == 0


# === replace_all ===


def test_replace_all_installs_records_and_persists(sample_roster, storage):
    assert [s.full_name for s in sample_roster] == ["أحمد محمد", "سارة محمد", "يوسف خالد"]
    assert len(stored_students(storage)) == 3


# === add ===


def test_add_prepends_with_fresh_id(sample_roster, storage):
    existing_ids = {s.id for s in sample_roster}

    response = sample_roster.add(
        {"full_name": "ليان سامي", "grade": "الخامس", "id": "forced", "attendance": {"x": "y"}}
    )

    assert response.success
    student = response.data["record"]
    assert sample_roster.students[0] is student
    assert student.id not in existing_ids
    assert student.id != "forced"
    assert student.attendance_records == {}
    assert student.grade == "الخامس"
    assert stored_students(storage)[0]["fullName"] == "ليان سامي"


def test_add_applies_form_defaults(empty_roster):
    student = empty_roster.add({"full_name": "ليان", "grade": "bad"}).data["record"]

    assert student.gender == "ذكر"
    assert student.has_siblings == "لا"
    assert student.timestamp != ""
    assert student.grade == "غير مصنف"


def test_add_requires_full_name(empty_roster):
    response = empty_roster.add({"full_name": "   "})

    assert not response.success
    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert len(empty_roster) == 0


# === update ===


def test_update_overwrites_fields_but_keeps_id_and_attendance(sample_roster):
    student = sample_roster.students[0]
    sample_roster.mark_attendance(student.id, "2024-01-15", "حاضر")

    response = sample_roster.update(
        student.id, {"full_name": "أحمد الجديد", "grade": "السابغ", "id": "x", "attendance": {}}
    )

    assert response.data["record"] is student
    assert student.full_name == "أحمد الجديد"
    assert student.grade == "السابع"
    assert student.attendance_on("2024-01-15") == "حاضر"
    assert sample_roster.students[0].id == student.id


def test_update_rejects_blank_full_name(sample_roster, storage):
    student = sample_roster.students[0]
    version = sample_roster.version

    response = sample_roster.update(student.id, {"full_name": "  ", "grade": "الثاني"})

    assert not response.success
    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert student.full_name == "أحمد محمد"
    assert student.grade == "الاول"
    assert sample_roster.version == version
    assert stored_students(storage)[0]["fullName"] == "أحمد محمد"


def test_update_unknown_id_is_a_silent_no_op(sample_roster):
    before = [s.to_dict() for s in sample_roster]

    response = sample_roster.update("missing", {"full_name": "x"})

    assert response.success
    assert response.data["record"] is None
    assert [s.to_dict() for s in sample_roster] == before


# === remove ===


def test_remove_deletes_record_and_persists(sample_roster, storage):
    target = sample_roster.students[1]

    response = sample_roster.remove(target.id)

    assert response.data["removed"]
    assert target.id not in [s.id for s in sample_roster]
    assert [s["id"] for s in stored_students(storage)] == [s.id for s in sample_roster]


def test_remove_unknown_id_leaves_roster_unchanged(sample_roster):
    before = sample_roster.students

    response = sample_roster.remove("missing")

    assert response.success
    assert not response.data["removed"]
    assert sample_roster.students == before


# === attendance ===


def test_mark_attendance_second_status_wins(sample_roster, storage):
    student = sample_roster.students[0]

    sample_roster.mark_attendance(student.id, "2024-01-15", "حاضر")
    sample_roster.mark_attendance(student.id, "2024-01-15", "غائب")

    assert student.attendance_records == {"2024-01-15": "غائب"}
    assert stored_students(storage)[0]["attendance"] == {"2024-01-15": "غائب"}


def test_mark_attendance_accepts_enum_status(sample_roster):
    from models.student import AttendanceStatus

    student = sample_roster.students[0]
    sample_roster.mark_attendance(student.id, "2024-01-15", AttendanceStatus.PRESENT)

    assert student.attendance_on("2024-01-15") == "حاضر"


def test_mark_attendance_unknown_id_is_a_no_op(sample_roster):
    response = sample_roster.mark_attendance("missing", "2024-01-15", "حاضر")

    assert response.success
    assert response.data["record"] is None
    assert all(not s.attendance_records for s in sample_roster)


# === persistence failures ===


def test_persistence_failure_is_logged_not_raised(caplog):
    roster = Roster(FailingStorage())

    with caplog.at_level(logging.ERROR, logger="models.roster"):
        response = roster.add({"full_name": "أحمد"})

    assert response.success
    assert len(roster) == 1
    assert "Failed to save students" in caplog.text


def test_save_reports_failure(caplog):
    response = Roster(FailingStorage()).save()

    assert not response.success
    assert response.error is ErrorCode.INTERNAL_ERROR


def test_version_increments_on_every_mutation(sample_roster):
    version = sample_roster.version

    sample_roster.remove("missing")

    assert sample_roster.version == version + 1


def test_find_student_by_uuid(sample_roster):
    student = sample_roster.students[0]

    assert sample_roster.find_student_by_uuid(student.id).data["record"] is student

    response = sample_roster.find_student_by_uuid("missing")
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404
