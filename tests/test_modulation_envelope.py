import pytest

from sfkit.modulation_envelope import ModulationEnvelope


def _envelope(sustain=0.5, release=1.0):
    env = ModulationEnvelope(100)
    env.start(0.5, 1.0, 1.0, 1.0, sustain, release)
    return env


def test_delay_is_silent_but_active():
    env = _envelope()
    assert env.value() == 0.0
    assert env.process(10) is True
    assert env.value() == 0.0


def test_attack_rises_monotonically_to_hold():
    env = _envelope()
    env.process(50)
    levels = []
    for _ in range(10):
        assert env.process(10) is True
        levels.append(env.value())
    assert levels == sorted(levels)
    assert 0.0 < levels[0] < 1.0


def test_hold_is_full_level():
    env = _envelope()
    env.process(200)
    assert env.value() == pytest.approx(1.0)


def test_decay_settles_at_sustain():
    env = _envelope(sustain=0.5)
    env.process(300)
    assert 0.5 <= env.value() <= 1.0
    assert env.process(200) is True
    assert env.value() == pytest.approx(0.5)


def test_sustain_is_clamped():
    env = _envelope(sustain=2.0)
    env.process(1000)
    assert env.value() == pytest.approx(1.0)


def test_release_falls_to_silence():
    env = _envelope(sustain=0.5, release=1.0)
    env.process(400)
    env.release()
    assert env.process(50) is True
    assert 0.0 < env.value() < 0.5
    assert env.process(100) is False
    assert env.value() == 0.0


def test_zero_length_segments_do_not_fail():
    env = ModulationEnvelope(100)
    env.start(0.0, 0.0, 0.0, 0.0, 0.25, 0.0)
    assert env.process(10) is True
    assert env.value() == pytest.approx(0.25)
    env.release()
    assert env.process(10) is False
    assert env.value() == 0.0