"""Stage transitions for recruitment journeys.

Any stage may move to any other stage, PLACED to PLACED included. Moving to
PLACED asks the caller to record the placement on the candidate. Moving away
from PLACED asks for nothing: a recorded placement is never cleared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from src.talent_portal.domain.models.journey import JourneyStage
from src.talent_portal.errors import ValidationError

DEFAULT_STAGE = JourneyStage.FIRST_INTERVIEW

STAGE_LABELS_NL = {
    JourneyStage.FIRST_INTERVIEW: "1e gesprek",
    JourneyStage.TRIAL_DAY: "Meeloopdag",
    JourneyStage.FINAL_OFFER: "Laatste aanbod",
    JourneyStage.PLACED: "Geplaatst",
    JourneyStage.REJECTED: "Afgewezen",
    JourneyStage.WITHDRAWN: "Teruggetrokken",
}


class Effect(str, Enum):
    RECORD_PLACEMENT = "record_placement"


@dataclass(frozen=True)
class Transition:
    previous_stage: Optional[JourneyStage]
    next_stage: JourneyStage
    effects: Tuple[Effect, ...] = ()


def stage_label(stage: JourneyStage) -> str:
    return STAGE_LABELS_NL.get(stage, stage.value)


def parse_stage(value: Union[JourneyStage, str, None]) -> JourneyStage:
    """Coerce a submitted stage. Blank means the default initial stage."""

    if value is None or value == "":
        return DEFAULT_STAGE
    if isinstance(value, JourneyStage):
        return value
    try:
        return JourneyStage(value)
    except ValueError:
        raise ValidationError(f"Unknown stage: {value!r}.", values={"stage": value}) from None


def transition(current: Optional[JourneyStage], new: JourneyStage) -> Transition:
    """Compute the outcome of moving a journey from ``current`` to ``new``.

    ``current`` is ``None`` for a journey that is being created.
    """

    effects: Tuple[Effect, ...] = ()
    if new == JourneyStage.PLACED:
        effects = (Effect.RECORD_PLACEMENT,)
    return Transition(previous_stage=current, next_stage=new, effects=effects)
