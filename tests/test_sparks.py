"""
Unit tests for spark emission and the particle pool.
"""

import numpy as np
import pytest

from wheelsim import ContactState, Particle, ParticlePool, SparkEmitter
from wheelsim.params import GRAVITY, TIME_SCALE
from wheelsim.sparks import spark_count, spark_lifetime

from tests.conftest import SequenceRandom

DT = 1.0 / 60.0
DT_EFF = DT * TIME_SCALE


def sliding_contact(sliding_velocity, point=(0.0, 0.0)) -> ContactState:
    return ContactState(
        has_contact=True,
        contact_point=np.array(point, dtype=float),
        sliding_velocity=np.array(sliding_velocity, dtype=float),
    )


class TestSparkEmitter:
    """Test suite for spark emission"""

    def test_no_sparks_without_contact(self, sequence_random: SequenceRandom) -> None:
        """Test that an airborne wheel throws no sparks"""
        emitter = SparkEmitter(sequence_random)
        contact = ContactState(has_contact=False, sliding_velocity=np.array([300.0, 0.0]))

        assert emitter.emit(contact) == []
        assert sequence_random.calls == 0

    def test_no_sparks_without_sliding(self, sequence_random: SequenceRandom) -> None:
        """Test that a rolling wheel throws no sparks"""
        emitter = SparkEmitter(sequence_random)

        assert emitter.emit(sliding_contact([0.0, 0.0])) == []

    def test_five_sparks_at_sliding_speed_30(self, sequence_random: SequenceRandom) -> None:
        """Test that sliding at 30 yields one full burst"""
        emitter = SparkEmitter(sequence_random)

        sparks = emitter.emit(sliding_contact([18.0, 24.0]))

        assert len(sparks) == 5

    @pytest.mark.parametrize(
        "speed, expected",
        [(0.0, 0), (5.9, 0), (6.0, 1), (12.0, 2), (29.9, 4), (30.0, 5), (61.0, 10)],
    )
    def test_spark_count(self, speed: float, expected: int) -> None:
        """Test floor(5 * speed / 30)"""
        assert spark_count(speed) == expected

    def test_spark_velocity_and_position(self, sequence_random: SequenceRandom) -> None:
        """Test velocity = 6 * sliding + direction * |sliding| at the contact point"""
        emitter = SparkEmitter(sequence_random)

        sparks = emitter.emit(sliding_contact([30.0, 0.0], point=(12.0, -7.0)))

        for spark in sparks:
            # Draws (+1, 0) give direction (1, 0)
            np.testing.assert_allclose(spark.velocity, [210.0, 0.0])
            np.testing.assert_allclose(spark.position, [12.0, -7.0])
            assert spark.remaining_life == pytest.approx(0.0005 * 210.0**2)

    def test_sparks_do_not_alias_contact_point(self, sequence_random: SequenceRandom) -> None:
        """Test that each spark owns its position"""
        emitter = SparkEmitter(sequence_random)
        contact = sliding_contact([30.0, 0.0])

        sparks = emitter.emit(contact)
        sparks[0].position[0] = 99.0

        assert contact.contact_point[0] == 0.0
        assert sparks[1].position[0] == 0.0

    def test_zero_length_direction(self) -> None:
        """Test that a zero draw adds no perturbation"""
        emitter = SparkEmitter(SequenceRandom([0.5]))

        sparks = emitter.emit(sliding_contact([6.0, 0.0]))

        assert len(sparks) == 1
        np.testing.assert_allclose(sparks[0].velocity, [36.0, 0.0])

    def test_lifetime_clamped(self) -> None:
        """Test the [10, 100] lifetime bounds"""
        assert spark_lifetime(0.0) == 10.0
        assert spark_lifetime(42.0) == 10.0
        assert spark_lifetime(300.0) == pytest.approx(45.0)
        assert spark_lifetime(600.0) == 100.0

    def test_default_random_source(self) -> None:
        """Test emission with the numpy generator"""
        emitter = SparkEmitter()

        sparks = emitter.emit(sliding_contact([0.0, -30.0]))

        assert len(sparks) == 5
        for spark in sparks:
            assert np.all(np.isfinite(spark.velocity))
            # Perturbation is at most |sliding| around 6 * sliding
            assert np.linalg.norm(spark.velocity - np.array([0.0, -180.0])) <= 30.0 + 1e-9
            assert 10.0 <= spark.remaining_life <= 100.0


class TestParticlePool:
    """Test suite for particle motion and expiry"""

    def test_life_boundary(self) -> None:
        """Test that a spark with life 10 survives 10 steps and is removed after the 11th"""
        pool = ParticlePool()
        pool.add([Particle(position=np.zeros(2), velocity=np.zeros(2), remaining_life=10.0)])

        for _ in range(10):
            pool.advance(DT)
            pool.prune()

        assert len(pool) == 1
        assert next(iter(pool)).remaining_life == 0.0

        pool.advance(DT)
        removed = pool.prune()

        assert removed == 1
        assert len(pool) == 0

    def test_ballistic_motion(self) -> None:
        """Test position with pre-step velocity, then gravity on v_y"""
        pool = ParticlePool()
        pool.add([Particle(position=np.array([1.0, 2.0]), velocity=np.array([10.0, 5.0]), remaining_life=50.0)])

        pool.advance(DT)

        spark = next(iter(pool))
        np.testing.assert_allclose(spark.position, [1.0 + 10.0 * DT_EFF, 2.0 + 5.0 * DT_EFF])
        np.testing.assert_allclose(spark.velocity, [10.0, 5.0 - GRAVITY * DT_EFF])
        assert spark.remaining_life == 49.0

    def test_integer_velocity_input(self) -> None:
        """Test that integer arrays are advanced without casting errors"""
        pool = ParticlePool()
        pool.add([Particle(position=np.array([0, 0]), velocity=np.array([1, 1]), remaining_life=20)])

        pool.advance(DT)

        assert next(iter(pool)).velocity[1] == pytest.approx(1.0 - GRAVITY * DT_EFF)

    def test_life_decrement_independent_of_dt(self) -> None:
        """Test that life drops one unit per advance for any dt"""
        pool = ParticlePool()
        pool.add([
            Particle(position=np.zeros(2), velocity=np.zeros(2), remaining_life=30.0),
        ])

        pool.advance(1.0 / 30.0)
        pool.advance(1.0 / 240.0)

        assert next(iter(pool)).remaining_life == 28.0

    def test_prune_keeps_survivors(self) -> None:
        """Test that pruning leaves live sparks untouched"""
        pool = ParticlePool()
        keep = Particle(position=np.array([5.0, 5.0]), velocity=np.zeros(2), remaining_life=3.0)
        pool.add([
            Particle(position=np.zeros(2), velocity=np.zeros(2), remaining_life=-1.0),
            keep,
            Particle(position=np.zeros(2), velocity=np.zeros(2), remaining_life=-0.5),
        ])

        removed = pool.prune()

        assert removed == 2
        assert len(pool) == 1
        assert next(iter(pool)) is keep
        np.testing.assert_allclose(keep.position, [5.0, 5.0])

    def test_as_array(self) -> None:
        """Test the [x, y, life] export for drawing"""
        pool = ParticlePool()
        assert pool.as_array().shape == (0, 3)

        pool.add([Particle(position=np.array([1.0, 2.0]), velocity=np.zeros(2), remaining_life=7.0)])

        np.testing.assert_allclose(pool.as_array(), [[1.0, 2.0, 7.0]])

    def test_rejects_invalid_dt(self) -> None:
        """Test that advance rejects a non-positive time step"""
        with pytest.raises(ValueError):
            ParticlePool().advance(0.0)
