"""Obstacles placed on the board."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .bullet import Point


class ObstacleKind(enum.Enum):
    """Hard obstacles kill on contact; soft ones cost a segment."""

    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class Obstacle:
    """A single obstacle cell."""

    kind: ObstacleKind
    location: Point