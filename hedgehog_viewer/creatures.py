"""Decorative hedgehogs wandering around the visible scene.

Each creature walks toward a random target inside the scene rectangle and
picks a new one when it gets close or when its countdown runs out. Nothing
here knows about the graph; the viewer only feeds in new bounds.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional

from .config import (
    CREATURE_COUNTDOWN, CREATURE_FACING_DEAD_ZONE, CREATURE_FOOTPRINT,
    CREATURE_RETARGET_DISTANCE, CREATURE_SPEED, CREATURE_WOBBLE,
)
from .geometry import Rect

log = logging.getLogger("hedgehog_viewer.creatures")


@dataclass
class CreatureState:
    id: int
    x: float
    y: float
    target_x: float = 0.0
    target_y: float = 0.0
    countdown: int = 0
    facing_right: bool = True


class CreatureAnimator:
    def __init__(self, rng: Optional[random.Random] = None, speed: float = CREATURE_SPEED,
                 footprint: float = CREATURE_FOOTPRINT):
        self.rng = rng or random.Random()
        self.speed = speed
        self.footprint = footprint
        self.bounds: Optional[Rect] = None
        self.creatures: List[CreatureState] = []

    def set_bounds(self, bounds: Optional[Rect]) -> None:
        if bounds is not None and not bounds.is_valid():
            return
        self.bounds = bounds
        for creature in self.creatures:
            self._clamp(creature)

    def spawn(self, count: int) -> List[CreatureState]:
        spawned = []
        for _ in range(count):
            if self.bounds is not None:
                x = self.rng.uniform(self.bounds.left, max(self.bounds.left, self.bounds.right - self.footprint))
                y = self.rng.uniform(self.bounds.top, max(self.bounds.top, self.bounds.bottom - self.footprint))
            else:
                x = self.rng.randrange(400) - 200
                y = self.rng.randrange(300) - 150
            creature = CreatureState(len(self.creatures), x, y)
            self.pick_new_target(creature)
            self.creatures.append(creature)
            spawned.append(creature)
        log.debug("Spawned %d creatures", count)
        return spawned

    def pick_new_target(self, creature: CreatureState) -> None:
        b = self.bounds
        if b is not None:
            mx, my = b.w * 0.1, b.h * 0.1
            creature.target_x = b.left + mx + self.rng.uniform(0, b.w - 2 * mx)
            creature.target_y = b.top + my + self.rng.uniform(0, b.h - 2 * my)
        else:
            creature.target_x = self.rng.randrange(500) - 250
            creature.target_y = self.rng.randrange(400) - 200
        creature.countdown = self.rng.randint(*CREATURE_COUNTDOWN)

    def tick(self) -> None:
        for creature in self.creatures:
            self.step(creature)

    def step(self, creature: CreatureState) -> None:
        dx = creature.target_x - creature.x
        dy = creature.target_y - creature.y
        distance = math.hypot(dx, dy)
        creature.countdown -= 1
        if distance < CREATURE_RETARGET_DISTANCE or creature.countdown <= 0:
            self.pick_new_target(creature)
            dx = creature.target_x - creature.x
            dy = creature.target_y - creature.y
            distance = math.hypot(dx, dy)
        if distance > 0:
            dx /= distance
            dy /= distance
            wobble = (self.rng.randrange(100) - 50) / 100.0
            dy += wobble * CREATURE_WOBBLE
            if dx < -CREATURE_FACING_DEAD_ZONE and creature.facing_right:
                creature.facing_right = False
            elif dx > CREATURE_FACING_DEAD_ZONE and not creature.facing_right:
                creature.facing_right = True
            creature.x += dx * self.speed
            creature.y += dy * self.speed
        self._clamp(creature)

    def _clamp(self, creature: CreatureState) -> None:
        b = self.bounds
        if b is None:
            return
        creature.x = min(max(creature.x, b.left), max(b.left, b.right - self.footprint))
        creature.y = min(max(creature.y, b.top), max(b.top, b.bottom - self.footprint))
