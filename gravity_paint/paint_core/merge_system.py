"""
Merge System
============

Particle-particle overlap detection and mass-conserving merge resolution.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gravity_paint.paint_core.color_blend import blend_rgb
from gravity_paint.paint_core.entities import Particle
from gravity_paint.paint_core.errors import EmptyMergeTarget
from gravity_paint.paint_core.geometry import circles_overlap
from gravity_paint.paint_core.state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Result of a single merge operation."""
    removed_uids: Tuple[int, int]
    created_uid: int
    position: Tuple[float, float]
    mass: float


def merge_particles(p1: Particle, p2: Particle) -> Particle:
    """
    Combine two particles into a new one.

    - mass is the exact sum, radius is sqrt(mass / pi)
    - position and velocity are mass-weighted averages
    - color is blended by p1's mass fraction
    - shape comes from p1, creation time is the older of the two
    """
    total_mass = p1.mass + p2.mass
    ratio = p1.mass / total_mass

    merged = Particle(
        x=(p1.x * p1.mass + p2.x * p2.mass) / total_mass,
        y=(p1.y * p1.mass + p2.y * p2.mass) / total_mass,
        radius=math.sqrt(total_mass / math.pi),
        color=blend_rgb(p1.color, p2.color, ratio),
        shape=p1.shape,
        creation_time=min(p1.creation_time, p2.creation_time),
        vx=(p1.vx * p1.mass + p2.vx * p2.mass) / total_mass,
        vy=(p1.vy * p1.mass + p2.vy * p2.mass) / total_mass,
    )
    merged.mass = total_mass
    return merged


class MergeSystem:
    """
    Forward-scan merging over the particle list.

    Only wet (not dry) particles take part, on both sides of a pair. The
    caller drives the scan slot by slot; after a merge it revisits the same
    slot, which now holds the merged particle.
    """

    def __init__(self, state: SimulationState):
        self._state = state
        self._merges = 0

    @property
    def merges(self) -> int:
        """Total number of merges performed this session."""
        return self._merges

    def find_partner(self, particles: List[Particle], index: int) -> Optional[int]:
        """
        Index of the first later wet particle overlapping particles[index].

        Returns None if particles[index] is dry or nothing overlaps.
        """
        particle = particles[index]
        if particle.is_dry:
            return None
        for j in range(index + 1, len(particles)):
            other = particles[j]
            if not other.is_dry and circles_overlap(particle, other):
                return j
        return None

    def merge_slots(self, particles: List[Particle], i: int, j: int) -> MergeResult:
        """
        Merge particles[j] into particles[i].

        The merged particle replaces slot i and slot j is removed, shifting
        the tail left by one.

        Raises:
            EmptyMergeTarget: If the slots are not two distinct live indices
                with i < j.
        """
        if not 0 <= i < j < len(particles):
            raise EmptyMergeTarget(
                f"Cannot merge slots {i} and {j} in a list of {len(particles)}"
            )

        p1 = particles[i]
        p2 = particles[j]
        merged = merge_particles(p1, p2)
        merged.uid = self._state.next_uid()

        particles[i] = merged
        del particles[j]
        self._merges += 1

        logger.debug(
            "Merged %d + %d -> %d (mass %.2f, r=%.2f)",
            p1.uid, p2.uid, merged.uid, merged.mass, merged.radius
        )
        return MergeResult(
            removed_uids=(p1.uid, p2.uid),
            created_uid=merged.uid,
            position=merged.position,
            mass=merged.mass
        )
