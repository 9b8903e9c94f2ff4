import pytest

from app.core.exceptions import AlreadyRecorded, NotFound
from app.modules.progress.schemas import LevelAward, LevelCreate, LevelUpdate, SkillAward, SkillCreate
from app.modules.progress.service import ProgressService


@pytest.fixture
def service(supabase):
    return ProgressService(supabase)


@pytest.fixture
def level(service):
    return service.create_level(LevelCreate(name_en="Beginner", name_id="Pemula", order_number=1))


@pytest.fixture
def skill(service, level):
    return service.create_skill(SkillCreate(name_en="Floating", name_id="Mengapung", level_id=level.id))


class TestCurriculum:
    def test_levels_listed_in_order(self, service, level):
        service.create_level(LevelCreate(name_en="Advanced", name_id="Mahir", order_number=3))
        service.create_level(LevelCreate(name_en="Intermediate", name_id="Menengah", order_number=2))

        assert [lvl.name_en for lvl in service.list_levels()] == ["Beginner", "Intermediate", "Advanced"]

    def test_skills_filtered_by_level(self, service, level, skill):
        other = service.create_level(LevelCreate(name_en="Advanced", name_id="Mahir", order_number=2))
        service.create_skill(SkillCreate(name_en="Dive", name_id="Menyelam", level_id=other.id))

        assert [s.id for s in service.list_skills(level_id=level.id)] == [skill.id]
        assert len(service.list_skills()) == 2

    def test_update_level(self, service, level):
        updated = service.update_level(level.id, LevelUpdate(description_en="First steps"))

        assert updated.description_en == "First steps"
        assert updated.name_en == "Beginner"

    def test_missing_level(self, service):
        with pytest.raises(NotFound):
            service.update_level("missing", LevelUpdate(name_en="x"))
        with pytest.raises(NotFound):
            service.delete_level("missing")


class TestAwards:
    def test_award_skill_records_validator_and_date(self, service, skill):
        record = service.award_skill("participant-1", SkillAward(skill_id=skill.id, notes="Great float"), "vol-1")

        assert record.skill_id == skill.id
        assert record.level_id is None
        assert record.validated_by_volunteer_id == "vol-1"
        assert record.achieved_date is not None
        assert record.notes == "Great float"

    def test_same_skill_twice_is_conflict(self, service, skill):
        service.award_skill("participant-1", SkillAward(skill_id=skill.id), "vol-1")

        with pytest.raises(AlreadyRecorded):
            service.award_skill("participant-1", SkillAward(skill_id=skill.id), "vol-2")

    def test_same_skill_for_different_participants(self, service, skill):
        service.award_skill("participant-1", SkillAward(skill_id=skill.id), "vol-1")
        service.award_skill("participant-2", SkillAward(skill_id=skill.id), "vol-1")

    def test_progress_splits_skills_and_levels(self, service, level, skill):
        service.award_skill("participant-1", SkillAward(skill_id=skill.id), "vol-1")
        service.award_level("participant-1", LevelAward(level_id=level.id), "vol-1")
        service.award_skill("participant-2", SkillAward(skill_id=skill.id), "vol-1")

        progress = service.get_participant_progress("participant-1")

        assert [r.skill_id for r in progress.skills] == [skill.id]
        assert [r.level_id for r in progress.levels] == [level.id]
        assert progress.skills[0].skill.name_en == "Floating"
        assert progress.skills[0].level is None
        assert progress.levels[0].level.name_id == "Pemula"

    def test_remove_record(self, service, skill):
        record = service.award_skill("participant-1", SkillAward(skill_id=skill.id), "vol-1")

        assert service.remove_record(record.id) is True
        assert service.get_participant_progress("participant-1").skills == []
        with pytest.raises(NotFound):
            service.remove_record(record.id)
