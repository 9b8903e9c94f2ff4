from datetime import date, time

import pytest

from app.config import settings
from app.core.exceptions import AlreadyRecorded, NotFound, ValidationFailed
from app.modules.sessions.schemas import AttendanceMark, SessionCreate, SessionUpdate
from app.modules.sessions.service import SessionService


@pytest.fixture
def service(supabase):
    return SessionService(supabase)


@pytest.fixture
def lesson(service):
    [created] = service.create_sessions(SessionCreate(date=date(2024, 1, 1), time=time(9, 0)))
    return created


class TestCreateSessions:
    def test_single_lesson(self, service, supabase):
        [created] = service.create_sessions(SessionCreate(date=date(2024, 1, 1), time=time(9, 30), type="Surf"))

        assert created.date == date(2024, 1, 1)
        assert created.time == time(9, 30)
        assert created.type == "Surf"
        assert supabase.rows("sessions")[0]["date"] == "2024-01-01"

    def test_weekly_recurrence_is_one_insert(self, service, supabase):
        created = service.create_sessions(SessionCreate(
            date=date(2024, 1, 1),
            time=time(16, 0),
            recurrence={"frequency": "weekly", "end_date": "2024-01-15"},
        ))

        assert [s.date for s in created] == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]
        assert all(s.time == time(16, 0) and s.type == "Swim Lesson" for s in created)
        assert supabase.mutations == [("insert", "sessions")]

    def test_recurrence_over_limit_rejected(self, service, supabase, monkeypatch):
        monkeypatch.setattr(settings, "max_recurring_sessions", 2)

        with pytest.raises(ValidationFailed) as exc_info:
            service.create_sessions(SessionCreate(
                date=date(2024, 1, 1),
                time=time(9, 0),
                recurrence={"frequency": "daily", "end_date": "2024-01-03"},
            ))

        assert exc_info.value.status_code == 400
        assert supabase.rows("sessions") == []


class TestLessonCrud:
    def test_list_latest_first_with_date_window(self, service):
        service.create_sessions(SessionCreate(
            date=date(2024, 1, 1),
            time=time(9, 0),
            recurrence={"frequency": "daily", "end_date": "2024-01-05"},
        ))

        lessons = service.list_sessions(from_date=date(2024, 1, 2), to_date=date(2024, 1, 4))

        assert [s.date for s in lessons] == [date(2024, 1, 4), date(2024, 1, 3), date(2024, 1, 2)]

    def test_update_and_delete(self, service, lesson):
        updated = service.update_session(lesson.id, SessionUpdate(type="Ocean Safety"))
        assert updated.type == "Ocean Safety"
        assert updated.date == lesson.date

        assert service.delete_session(lesson.id) is True
        with pytest.raises(NotFound):
            service.get_session(lesson.id)

    def test_unknown_lesson(self, service):
        with pytest.raises(NotFound):
            service.update_session("missing", SessionUpdate(type="Surf"))


class TestAttendance:
    def test_sign_up_twice_is_conflict(self, service, lesson):
        signup = service.sign_up(lesson.id, "participant-1")
        assert signup.status == "signed_up"

        with pytest.raises(AlreadyRecorded):
            service.sign_up(lesson.id, "participant-1")

    def test_sign_up_for_unknown_lesson(self, service):
        with pytest.raises(NotFound):
            service.sign_up("missing", "participant-1")

    def test_cancel_only_pending_sign_up(self, service, lesson, supabase):
        service.sign_up(lesson.id, "participant-1")
        assert service.cancel_sign_up(lesson.id, "participant-1") is True
        assert supabase.rows("session_participants") == []

        service.sign_up(lesson.id, "participant-1")
        service.mark_attendance(lesson.id, AttendanceMark(participant_id="participant-1", status="present"), "vol-1")
        with pytest.raises(NotFound):
            service.cancel_sign_up(lesson.id, "participant-1")

    def test_check_in_is_self_reported(self, service, lesson):
        service.sign_up(lesson.id, "participant-1")

        checked_in = service.check_in(lesson.id, "participant-1")

        assert checked_in.status == "self_reported"
        assert checked_in.marked_at is not None

    def test_check_in_does_not_override_staff_mark(self, service, lesson, supabase):
        service.mark_attendance(lesson.id, AttendanceMark(participant_id="participant-1", status="absent"), "vol-1")

        result = service.check_in(lesson.id, "participant-1")

        assert result.status == "absent"
        [row] = supabase.rows("session_participants")
        assert row["status"] == "absent"
        assert row["validated_by_volunteer_id"] == "vol-1"

    def test_mark_overwrites_single_row(self, service, lesson, supabase):
        service.sign_up(lesson.id, "participant-1")
        service.check_in(lesson.id, "participant-1")
        marked = service.mark_attendance(
            lesson.id,
            AttendanceMark(participant_id="participant-1", status="present", notes="Swam 10m"),
            "vol-1"
        )

        assert marked.status == "present"
        assert marked.notes == "Swam 10m"
        assert len(supabase.rows("session_participants")) == 1

    def test_roster_groups_by_status(self, service, lesson, supabase):
        ids = {}
        for key, phone, name in [
            ("signed", "6281100000011", "Ani"),
            ("self", "6281100000012", "Budi"),
            ("present", "6281100000013", "Citra"),
            ("absent", "6281100000014", "Dewi"),
        ]:
            ids[key] = supabase.participant_id_for(supabase.seed_account("participant", phone, name))
        service.sign_up(lesson.id, ids["signed"])
        service.check_in(lesson.id, ids["self"])
        service.mark_attendance(lesson.id, AttendanceMark(participant_id=ids["present"], status="present"), "vol-1")
        service.mark_attendance(lesson.id, AttendanceMark(participant_id=ids["absent"], status="absent"), "vol-1")

        roster = service.get_roster(lesson.id)

        assert roster.session.id == lesson.id
        assert [(r.participant_id, r.participant_name) for r in roster.signups] == [(ids["signed"], "Ani")]
        assert [r.participant_name for r in roster.needs_validation] == ["Budi"]
        assert [r.participant_name for r in roster.present] == ["Citra"]
        assert [r.participant_name for r in roster.absent] == ["Dewi"]

    def test_roster_of_unknown_participant_has_no_name(self, service, lesson):
        service.sign_up(lesson.id, "gone-participant")

        [row] = service.get_roster(lesson.id).signups

        assert row.participant_name is None

    def test_participant_history(self, service, lesson):
        service.sign_up(lesson.id, "participant-1")
        service.sign_up(lesson.id, "participant-2")

        history = service.list_attendance_for_participant("participant-1")

        assert [h.session_id for h in history] == [lesson.id]
        assert history[0].session.date == lesson.date
