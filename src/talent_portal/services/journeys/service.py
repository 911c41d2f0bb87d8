from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union
from uuid import UUID, uuid4

from src.talent_portal.domain.models.candidate import Candidate
from src.talent_portal.domain.models.journey import Journey, JourneyStage
from src.talent_portal.errors import NotFound, PersistenceError, ValidationError
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.services.journeys.state_machine import Effect, parse_stage, transition

logger = logging.getLogger(__name__)


def parse_scheduled_at(value: Union[datetime, str, None]) -> Optional[datetime]:
    """Parse an ISO or ``datetime-local`` form value.

    Blank and unparseable values yield ``None`` rather than an error. Naive
    values are taken as UTC.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class JourneyService:
    """Create and advance journeys, applying the placement side effect.

    Callers are responsible for restricting these operations to the owner.

    Placement is a last-writer-wins field write on the candidate: two
    journeys for the same candidate moved to PLACED concurrently race, and
    whichever candidate save lands last determines ``placed_clinic_id``.
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    def get_journey(self, journey_id: UUID) -> Journey:
        journey = self._store.journeys.get(journey_id)
        if journey is None:
            raise NotFound(f"journey {journey_id}")
        return journey

    def list_journeys(
        self,
        *,
        clinic_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
    ) -> List[Journey]:
        return list(self._store.journeys.list_by_filters(clinic_id=clinic_id, candidate_id=candidate_id))

    def create_journey(
        self,
        *,
        clinic_id: UUID,
        candidate_id: UUID,
        stage: Union[JourneyStage, str, None] = None,
        scheduled_at: Union[datetime, str, None] = None,
        notes: Optional[str] = None,
        created_by_user_id: Optional[UUID] = None,
    ) -> Journey:
        next_stage = parse_stage(stage)
        if self._store.clinics.get(clinic_id) is None:
            raise NotFound(f"clinic {clinic_id}")
        if self._store.candidates.get(candidate_id) is None:
            raise NotFound(f"candidate {candidate_id}")

        result = transition(None, next_stage)
        journey = Journey(
            id=uuid4(),
            clinic_id=clinic_id,
            candidate_id=candidate_id,
            stage=result.next_stage,
            scheduled_at=parse_scheduled_at(scheduled_at),
            notes=notes or None,
            created_by_user_id=created_by_user_id,
            created_at=datetime.now(timezone.utc),
        )
        self._store.journeys.save(journey)
        logger.info(
            "Created journey %s (clinic=%s candidate=%s stage=%s)",
            journey.id,
            clinic_id,
            candidate_id,
            journey.stage.value,
        )

        self._apply_effects(journey, result.effects)
        return journey

    def update_journey(
        self,
        journey_id: UUID,
        *,
        stage: Union[JourneyStage, str, None],
        scheduled_at: Union[datetime, str, None] = None,
        notes: Optional[str] = None,
    ) -> Journey:
        """Overwrite stage, schedule and notes of an existing journey."""

        if stage is None or stage == "":
            raise ValidationError("Stage is required.", values={"stage": stage})
        next_stage = parse_stage(stage)
        journey = self.get_journey(journey_id)

        result = transition(journey.stage, next_stage)
        journey.stage = result.next_stage
        journey.scheduled_at = parse_scheduled_at(scheduled_at)
        journey.notes = notes or None
        self._store.journeys.save(journey)
        logger.info(
            "Journey %s moved %s -> %s",
            journey.id,
            result.previous_stage.value if result.previous_stage else None,
            journey.stage.value,
        )

        self._apply_effects(journey, result.effects)
        return journey

    def _apply_effects(self, journey: Journey, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if effect == Effect.RECORD_PLACEMENT:
                self._record_placement(journey)

    def _record_placement(self, journey: Journey) -> Candidate:
        # The journey has already been saved. A failure here leaves it at
        # PLACED with the candidate unmarked; it is reported, not rolled back.
        try:
            candidate = self._store.candidates.get(journey.candidate_id)
            if candidate is None:
                raise PersistenceError(f"candidate {journey.candidate_id} vanished before placement")
            candidate.placed_clinic_id = journey.clinic_id
            candidate.placed_at = datetime.now(timezone.utc)
            self._store.candidates.save(candidate)
        except PersistenceError:
            logger.exception("Failed to record placement for journey %s", journey.id)
            raise
        logger.info("Candidate %s placed at clinic %s", candidate.id, journey.clinic_id)
        return candidate
