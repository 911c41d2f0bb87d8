from datetime import datetime, timezone
from uuid import uuid4

import pytest

from src.talent_portal.domain.models.journey import JourneyStage
from src.talent_portal.errors import NotFound, PersistenceError, ValidationError
from src.talent_portal.services.journeys.service import JourneyService, parse_scheduled_at


def test_create_defaults_to_first_interview(store, make_clinic, make_candidate, owner):
    clinic, candidate = make_clinic(), make_candidate()

    journey = JourneyService(store).create_journey(
        clinic_id=clinic.id,
        candidate_id=candidate.id,
        created_by_user_id=owner.id,
    )

    assert journey.stage == JourneyStage.FIRST_INTERVIEW
    assert journey.created_by_user_id == owner.id
    assert store.journeys.get(journey.id) == journey
    assert store.candidates.get(candidate.id).placed_clinic_id is None


def test_create_as_placed_records_placement(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()

    before = datetime.now(timezone.utc)
    journey = JourneyService(store).create_journey(
        clinic_id=clinic.id,
        candidate_id=candidate.id,
        stage="PLACED",
    )

    placed = store.candidates.get(candidate.id)
    assert journey.stage == JourneyStage.PLACED
    assert placed.placed_clinic_id == clinic.id
    assert placed.placed_at is not None and placed.placed_at >= before


def test_trial_day_then_placed_scenario(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)

    journey = service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id, stage="TRIAL_DAY")
    assert store.candidates.get(candidate.id).placed_at is None

    before = datetime.now(timezone.utc)
    service.update_journey(journey.id, stage="PLACED")
    after = datetime.now(timezone.utc)

    placed = store.candidates.get(candidate.id)
    assert placed.placed_clinic_id == clinic.id
    assert before <= placed.placed_at <= after


def test_leaving_placed_keeps_placement(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)
    journey = service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id, stage="PLACED")
    placed_at = store.candidates.get(candidate.id).placed_at

    updated = service.update_journey(journey.id, stage="REJECTED")

    assert updated.stage == JourneyStage.REJECTED
    after = store.candidates.get(candidate.id)
    assert after.placed_clinic_id == clinic.id
    assert after.placed_at == placed_at


def test_latest_placement_wins(store, make_clinic, make_candidate):
    first_clinic, second_clinic, candidate = make_clinic(), make_clinic(name="Kliniek Zuid"), make_candidate()
    service = JourneyService(store)
    first = service.create_journey(clinic_id=first_clinic.id, candidate_id=candidate.id)
    second = service.create_journey(clinic_id=second_clinic.id, candidate_id=candidate.id)

    service.update_journey(first.id, stage="PLACED")
    service.update_journey(second.id, stage="PLACED")

    assert store.candidates.get(candidate.id).placed_clinic_id == second_clinic.id


def test_update_overwrites_schedule_and_notes(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)
    journey = service.create_journey(
        clinic_id=clinic.id,
        candidate_id=candidate.id,
        scheduled_at="2026-11-02T10:30",
        notes="Kennismaking",
    )
    assert journey.scheduled_at == datetime(2026, 11, 2, 10, 30, tzinfo=timezone.utc)

    updated = service.update_journey(journey.id, stage="FINAL_OFFER")

    assert updated.scheduled_at is None
    assert updated.notes is None
    assert store.journeys.get(journey.id).stage == JourneyStage.FINAL_OFFER


def test_several_journeys_between_same_pair(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)

    service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id, stage="WITHDRAWN")
    service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id)

    assert len(service.list_journeys(clinic_id=clinic.id, candidate_id=candidate.id)) == 2


def test_create_rejects_unknown_stage_without_persisting(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()

    with pytest.raises(ValidationError):
        JourneyService(store).create_journey(clinic_id=clinic.id, candidate_id=candidate.id, stage="HIRED")

    assert store.journeys.count() == 0


def test_update_rejects_unknown_or_missing_stage(store, make_clinic, make_candidate):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)
    journey = service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id, notes="keep")

    for bad in ("HIRED", "", None):
        with pytest.raises(ValidationError):
            service.update_journey(journey.id, stage=bad)

    unchanged = store.journeys.get(journey.id)
    assert unchanged.stage == JourneyStage.FIRST_INTERVIEW
    assert unchanged.notes == "keep"


def test_create_requires_existing_clinic_and_candidate(store, make_clinic, make_candidate):
    service = JourneyService(store)

    with pytest.raises(NotFound):
        service.create_journey(clinic_id=uuid4(), candidate_id=make_candidate().id)
    with pytest.raises(NotFound):
        service.create_journey(clinic_id=make_clinic().id, candidate_id=uuid4())
    assert store.journeys.count() == 0


def test_update_unknown_journey(store):
    with pytest.raises(NotFound):
        JourneyService(store).update_journey(uuid4(), stage="PLACED")


def test_failed_placement_write_keeps_journey_placed(store, make_clinic, make_candidate, monkeypatch):
    clinic, candidate = make_clinic(), make_candidate()
    service = JourneyService(store)
    journey = service.create_journey(clinic_id=clinic.id, candidate_id=candidate.id)

    def failing_save(_candidate):
        raise PersistenceError("disk full")

    monkeypatch.setattr(store.candidates, "save", failing_save)

    with pytest.raises(PersistenceError):
        service.update_journey(journey.id, stage="PLACED")

    assert store.journeys.get(journey.id).stage == JourneyStage.PLACED
    assert store.candidates.get(candidate.id).placed_clinic_id is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ("not a date", None),
        ("2026-11-02T10:30", datetime(2026, 11, 2, 10, 30, tzinfo=timezone.utc)),
        ("2026-11-02T10:30:00Z", datetime(2026, 11, 2, 10, 30, tzinfo=timezone.utc)),
    ],
)
def test_parse_scheduled_at(value, expected):
    assert parse_scheduled_at(value) == expected
