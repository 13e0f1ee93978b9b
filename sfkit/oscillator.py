"""Sample playback oscillator using fixed-point positions."""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

# Positions are fixed-point numbers whose lower 24 bits hold the fraction.
_FRAC_BITS = 24
_FRAC_UNIT = 1 << _FRAC_BITS
_FRAC_MASK = _FRAC_UNIT - 1
_FP_TO_SAMPLE = 1.0 / (32768 * _FRAC_UNIT)


class LoopMode(IntEnum):
    """Sample loop modes."""

    NO_LOOP = 0
    CONTINUOUS = 1
    LOOP_UNTIL_NOTE_OFF = 3


class Oscillator:
    """Reads and resamples 16-bit sample data at a given pitch."""

    def __init__(self, sample_rate: int) -> None:
        self._synthesizer_sample_rate = sample_rate
        self._loop_mode = int(LoopMode.NO_LOOP)
        self._sample_sample_rate = 0
        self._start = 0
        self._end = 0
        self._start_loop = 0
        self._end_loop = 0
        self._root_key = 0
        self._tune = 0.0
        self._pitch_change_scale = 0.0
        self._sample_rate_ratio = 0.0
        self._looping = False
        self._position_fp = 0

    def start(
        self,
        loop_mode: int,
        sample_rate: int,
        start: int,
        end: int,
        start_loop: int,
        end_loop: int,
        root_key: int,
        coarse_tune: int,
        fine_tune: int,
        scale_tuning: int,
    ) -> None:
        """Begin playback of the sample described by the arguments."""
        self._loop_mode = int(loop_mode)
        self._sample_sample_rate = sample_rate
        self._start = start
        self._end = end
        self._start_loop = start_loop
        self._end_loop = end_loop
        self._root_key = root_key

        self._tune = coarse_tune + 0.01 * fine_tune
        self._pitch_change_scale = 0.01 * scale_tuning
        self._sample_rate_ratio = sample_rate / self._synthesizer_sample_rate
        self._looping = self._loop_mode != LoopMode.NO_LOOP
        self._position_fp = start << _FRAC_BITS

    def release(self) -> None:
        """Stop looping if the loop lasts only until note-off."""
        if self._loop_mode == LoopMode.LOOP_UNTIL_NOTE_OFF:
            self._looping = False

    def process(
        self, data: Sequence[int], block_size: int, pitch: float
    ) -> list[float] | None:
        """Render ``block_size`` samples at ``pitch``.

        Returns None once the sample has ended before the block began.
        """
        pitch_change = self._pitch_change_scale * (pitch - self._root_key) + self._tune
        pitch_ratio = self._sample_rate_ratio * 2.0 ** (pitch_change / 12.0)
        pitch_ratio_fp = int(_FRAC_UNIT * pitch_ratio)
        if self._looping:
            return self._fill_continuous(data, block_size, pitch_ratio_fp)
        return self._fill_no_loop(data, block_size, pitch_ratio_fp)

    def _fill_no_loop(
        self, data: Sequence[int], block_size: int, pitch_ratio_fp: int
    ) -> list[float] | None:
        block: list[float] = []
        for _ in range(block_size):
            index = self._position_fp >> _FRAC_BITS
            if index >= self._end:
                if not block:
                    return None
                block.extend([0.0] * (block_size - len(block)))
                return block
            x1 = data[index]
            x2 = data[index + 1]
            a_fp = self._position_fp & _FRAC_MASK
            block.append(_FP_TO_SAMPLE * ((x1 << _FRAC_BITS) + a_fp * (x2 - x1)))
            self._position_fp += pitch_ratio_fp
        return block

    def _fill_continuous(
        self, data: Sequence[int], block_size: int, pitch_ratio_fp: int
    ) -> list[float]:
        end_loop_fp = self._end_loop << _FRAC_BITS
        loop_length = self._end_loop - self._start_loop
        loop_length_fp = loop_length << _FRAC_BITS

        block: list[float] = []
        for _ in range(block_size):
            if self._position_fp >= end_loop_fp:
                self._position_fp -= loop_length_fp
            index1 = self._position_fp >> _FRAC_BITS
            index2 = index1 + 1
            if index2 >= self._end_loop:
                index2 -= loop_length
            x1 = data[index1]
            x2 = data[index2]
            a_fp = self._position_fp & _FRAC_MASK
            block.append(_FP_TO_SAMPLE * ((x1 << _FRAC_BITS) + a_fp * (x2 - x1)))
            self._position_fp += pitch_ratio_fp
        return block