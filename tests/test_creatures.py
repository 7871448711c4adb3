"""Tests for the wandering creature animator."""

import random

import pytest

from hedgehog_viewer.config import CREATURE_COUNTDOWN, CREATURE_FOOTPRINT, CREATURE_SPEED
from hedgehog_viewer.creatures import CreatureAnimator, CreatureState
from hedgehog_viewer.geometry import Rect


def _inside(creature, bounds, footprint=CREATURE_FOOTPRINT):
    return (bounds.left <= creature.x <= bounds.right - footprint
            and bounds.top <= creature.y <= bounds.bottom - footprint)


class TestTargets:
    def test_target_within_inset(self, rng):
        animator = CreatureAnimator(rng)
        bounds = Rect(-300, -200, 600, 400)
        animator.set_bounds(bounds)
        creature = CreatureState(0, 0, 0)
        for _ in range(200):
            animator.pick_new_target(creature)
            assert -240 <= creature.target_x <= 240
            assert -160 <= creature.target_y <= 160
            assert CREATURE_COUNTDOWN[0] <= creature.countdown <= CREATURE_COUNTDOWN[1]

    def test_retarget_when_close(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 1000, 1000))
        creature = CreatureState(0, 500, 500, target_x=505, target_y=500, countdown=200)
        animator.step(creature)
        assert (creature.target_x, creature.target_y) != (505, 500)

    def test_retarget_when_countdown_expires(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 1000, 1000))
        creature = CreatureState(0, 100, 100, target_x=900, target_y=900, countdown=1)
        animator.step(creature)
        assert creature.countdown >= CREATURE_COUNTDOWN[0] - 1
        assert (creature.target_x, creature.target_y) != (900, 900)


class TestMovement:
    def test_moves_toward_target(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 1000, 1000))
        creature = CreatureState(0, 100, 500, target_x=800, target_y=500, countdown=200)
        animator.step(creature)
        assert creature.x == pytest.approx(100 + CREATURE_SPEED)
        assert abs(creature.y - 500) <= CREATURE_SPEED * 0.2

    def test_facing_flips_with_direction(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 1000, 1000))
        creature = CreatureState(0, 500, 500, target_x=100, target_y=500, countdown=200)
        animator.step(creature)
        assert creature.facing_right is False
        creature.target_x, creature.target_y = 900, 500
        animator.step(creature)
        assert creature.facing_right is True

    def test_dead_zone_keeps_facing(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 1000, 1000))
        # nearly vertical walk, slightly leftward
        creature = CreatureState(0, 500, 100, target_x=495, target_y=900, countdown=200)
        animator.step(creature)
        assert creature.facing_right is True

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_stays_within_bounds(self, seed):
        animator = CreatureAnimator(random.Random(seed))
        bounds = Rect(-300, -200, 600, 400)
        animator.set_bounds(bounds)
        animator.spawn(3)
        for _ in range(2000):
            animator.tick()
            for creature in animator.creatures:
                assert _inside(creature, bounds)

    def test_shrinking_bounds_clamps(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 2000, 2000))
        animator.spawn(2)
        small = Rect(0, 0, 200, 100)
        animator.set_bounds(small)
        for _ in range(500):
            animator.tick()
            assert all(_inside(c, small) for c in animator.creatures)

    def test_invalid_bounds_ignored(self, rng):
        animator = CreatureAnimator(rng)
        good = Rect(0, 0, 100, 100)
        animator.set_bounds(good)
        animator.set_bounds(Rect(0, 0, 0, 0))
        assert animator.bounds == good


class TestSpawn:
    def test_spawn_counts(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 500, 500))
        animator.spawn(2)
        assert [c.id for c in animator.creatures] == [0, 1]

    def test_no_creatures_is_fine(self, rng):
        animator = CreatureAnimator(rng)
        animator.set_bounds(Rect(0, 0, 500, 500))
        animator.tick()
        assert animator.creatures == []
