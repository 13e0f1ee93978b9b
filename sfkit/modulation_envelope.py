"""DAHDSR envelope used for modulation."""

from __future__ import annotations

import math
from enum import IntEnum


class EnvelopeStage(IntEnum):
    """Stages of an envelope, in order."""

    DELAY = 0
    ATTACK = 1
    HOLD = 2
    DECAY = 3
    RELEASE = 4


def _reciprocal(value: float) -> float:
    if value == 0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def _max(a: float, b: float) -> float:
    return a if a > b else b


class ModulationEnvelope:
    """Delay, attack, hold, decay, sustain and release envelope."""

    def __init__(self, sample_rate: int, non_audible: float = 1.0e-3) -> None:
        self._sample_rate = sample_rate
        self._non_audible = non_audible
        self._attack_slope = 0.0
        self._decay_slope = 0.0
        self._release_slope = 0.0
        self._attack_start_time = 0.0
        self._hold_start_time = 0.0
        self._decay_start_time = 0.0
        self._decay_end_time = 0.0
        self._release_end_time = 0.0
        self._sustain_level = 0.0
        self._release_level = 0.0
        self._processed_sample_count = 0
        self._stage = EnvelopeStage.DELAY
        self._value = 0.0

    def start(
        self,
        delay: float,
        attack: float,
        hold: float,
        decay: float,
        sustain: float,
        release: float,
    ) -> None:
        """Start the envelope; times are in seconds, sustain is a level."""
        self._attack_slope = _reciprocal(attack)
        self._decay_slope = _reciprocal(decay)
        self._release_slope = _reciprocal(release)

        self._attack_start_time = delay
        self._hold_start_time = self._attack_start_time + attack
        self._decay_start_time = self._hold_start_time + hold

        self._decay_end_time = self._decay_start_time + decay
        self._release_end_time = release

        self._sustain_level = min(max(sustain, 0.0), 1.0)
        self._release_level = 0.0

        self._processed_sample_count = 0
        self._stage = EnvelopeStage.DELAY
        self._value = 0.0

        self.process(0)

    def release(self) -> None:
        """Enter the release stage from the current level."""
        self._stage = EnvelopeStage.RELEASE
        self._release_end_time += self._processed_sample_count / self._sample_rate
        self._release_level = self._value

    def process(self, sample_count: int) -> bool:
        """Advance by ``sample_count`` samples; False once the envelope is inaudible."""
        self._processed_sample_count += sample_count
        current_time = self._processed_sample_count / self._sample_rate

        end_times = {
            EnvelopeStage.DELAY: self._attack_start_time,
            EnvelopeStage.ATTACK: self._hold_start_time,
            EnvelopeStage.HOLD: self._decay_start_time,
        }
        while self._stage <= EnvelopeStage.HOLD:
            if current_time < end_times[self._stage]:
                break
            self._stage = EnvelopeStage(self._stage + 1)

        if self._stage == EnvelopeStage.DELAY:
            self._value = 0.0
            return True
        if self._stage == EnvelopeStage.ATTACK:
            self._value = self._attack_slope * (current_time - self._attack_start_time)
            return True
        if self._stage == EnvelopeStage.HOLD:
            self._value = 1.0
            return True
        if self._stage == EnvelopeStage.DECAY:
            self._value = _max(
                self._decay_slope * (self._decay_end_time - current_time),
                self._sustain_level,
            )
            return self._value > self._non_audible
        self._value = _max(
            self._release_level
            * self._release_slope
            * (self._release_end_time - current_time),
            0.0,
        )
        return self._value > self._non_audible

    def value(self) -> float:
        """Current envelope level."""
        return self._value