"""Configuration classes for the scheduling engine."""

from enum import Enum

from pydantic import BaseModel


class RelationMode(str, Enum):
    """How dependency relation types enter the scheduling arithmetic."""

    TYPED = "typed"  # Each relation constrains its own pair of endpoints
    FINISH_TO_START = "finish_to_start"  # Every relation is treated as finish-to-start


class SchedulingConfig(BaseModel):
    """Configuration for the critical path engine."""

    relation_mode: RelationMode = RelationMode.TYPED

    # Log tasks lacking a start or end date; the warning is always recorded
    log_missing_dates: bool = True
