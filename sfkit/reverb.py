"""Freeverb-style stereo reverb built from comb and all-pass filters."""

from __future__ import annotations

import math
from typing import MutableSequence, Sequence

_FIXED_GAIN = 0.015
_SCALE_WET = 3.0
_SCALE_DAMP = 0.4
_SCALE_ROOM = 0.28
_OFFSET_ROOM = 0.7
_INITIAL_ROOM = 0.5
_INITIAL_DAMP = 0.5
_INITIAL_WET = 1.0 / _SCALE_WET
_INITIAL_WIDTH = 1.0
_STEREO_SPREAD = 23

_COMB_TUNINGS = (1116, 1188, 1277, 1356, 1422, 1491, 1557, 1617)
_ALL_PASS_TUNINGS = (556, 441, 341, 225)

# Values below this are flushed to zero to keep the feedback loops clean.
_DENORMAL_THRESHOLD = 1.0e-6


def _scale_tuning(sample_rate: int, tuning: int) -> int:
    return int(math.floor(sample_rate / 44100.0 * tuning + 0.5))


def _flush(value: float) -> float:
    return 0.0 if abs(value) < _DENORMAL_THRESHOLD else value


class CombFilter:
    """Low-pass feedback comb filter."""

    def __init__(self, buffer_size: int) -> None:
        self._buffer = [0.0] * buffer_size
        self._buffer_index = 0
        self._filter_store = 0.0
        self.feedback = 0.0
        self._damp1 = 0.0
        self._damp2 = 1.0

    def mute(self) -> None:
        """Clear the delay line and the filter state."""
        self._buffer = [0.0] * len(self._buffer)
        self._filter_store = 0.0

    def process(
        self, input_block: Sequence[float], output_block: MutableSequence[float]
    ) -> None:
        """Filter ``input_block`` and add the result into ``output_block``."""
        if len(input_block) != len(output_block):
            raise ValueError("The input and output blocks must be the same length.")
        buffer = self._buffer
        size = len(buffer)
        for pos, sample in enumerate(input_block):
            if self._buffer_index == size:
                self._buffer_index = 0
            delayed = _flush(buffer[self._buffer_index])
            self._filter_store = _flush(
                delayed * self._damp2 + self._filter_store * self._damp1
            )
            buffer[self._buffer_index] = sample + self._filter_store * self.feedback
            output_block[pos] += delayed
            self._buffer_index += 1

    def set_damp(self, value: float) -> None:
        """Set the damping amount of the internal low-pass filter."""
        self._damp1 = value
        self._damp2 = 1.0 - value


class AllPassFilter:
    """Schroeder all-pass filter."""

    def __init__(self, buffer_size: int) -> None:
        self._buffer = [0.0] * buffer_size
        self._buffer_index = 0
        self.feedback = 0.0

    def mute(self) -> None:
        """Clear the delay line."""
        self._buffer = [0.0] * len(self._buffer)

    def process(self, block: MutableSequence[float]) -> None:
        """Filter ``block`` in place."""
        buffer = self._buffer
        size = len(buffer)
        for pos, sample in enumerate(block):
            if self._buffer_index == size:
                self._buffer_index = 0
            delayed = _flush(buffer[self._buffer_index])
            block[pos] = delayed - sample
            buffer[self._buffer_index] = sample + delayed * self.feedback
            self._buffer_index += 1


class Reverb:
    """Stereo reverb: eight parallel combs followed by four all-passes per side."""

    def __init__(self, sample_rate: int) -> None:
        self._combs_left = [
            CombFilter(_scale_tuning(sample_rate, t)) for t in _COMB_TUNINGS
        ]
        self._combs_right = [
            CombFilter(_scale_tuning(sample_rate, t + _STEREO_SPREAD))
            for t in _COMB_TUNINGS
        ]
        self._all_passes_left = [
            AllPassFilter(_scale_tuning(sample_rate, t)) for t in _ALL_PASS_TUNINGS
        ]
        self._all_passes_right = [
            AllPassFilter(_scale_tuning(sample_rate, t + _STEREO_SPREAD))
            for t in _ALL_PASS_TUNINGS
        ]
        for apf in (*self._all_passes_left, *self._all_passes_right):
            apf.feedback = 0.5

        self._gain = 0.0
        self._wet = _INITIAL_WET * _SCALE_WET
        self._room_size = _INITIAL_ROOM * _SCALE_ROOM + _OFFSET_ROOM
        self._damp = _INITIAL_DAMP * _SCALE_DAMP
        self._width = _INITIAL_WIDTH
        self._wet1 = 0.0
        self._wet2 = 0.0
        self._update()

    def _update(self) -> None:
        self._wet1 = self._wet * (self._width / 2.0 + 0.5)
        self._wet2 = self._wet * ((1.0 - self._width) / 2.0)
        self._gain = _FIXED_GAIN
        for comb in (*self._combs_left, *self._combs_right):
            comb.feedback = self._room_size
            comb.set_damp(self._damp)

    def mute(self) -> None:
        """Clear all internal filter state."""
        for filt in (
            *self._combs_left,
            *self._combs_right,
            *self._all_passes_left,
            *self._all_passes_right,
        ):
            filt.mute()

    def process(self, input_block: Sequence[float]) -> tuple[list[float], list[float]]:
        """Run a mono block through the reverb and return the left and right output."""
        left = [0.0] * len(input_block)
        right = [0.0] * len(input_block)

        for comb in self._combs_left:
            comb.process(input_block, left)
        for apf in self._all_passes_left:
            apf.process(left)
        for comb in self._combs_right:
            comb.process(input_block, right)
        for apf in self._all_passes_right:
            apf.process(right)

        # With the default settings the stereo mix is the identity.
        if 1.0 - self._wet1 > 1.0e-3 or self._wet2 > 1.0e-3:
            mixed = [
                (l * self._wet1 + r * self._wet2, r * self._wet1 + l * self._wet2)
                for l, r in zip(left, right)
            ]
            left = [l for l, _ in mixed]
            right = [r for _, r in mixed]

        return left, right

    def input_gain(self) -> float:
        """Gain to apply to the signal fed into the reverb."""
        return self._gain