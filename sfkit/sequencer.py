"""Plays a MIDI file through a synthesizer, block by block."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol, Sequence


class MessageType(IntEnum):
    """Kinds of message in a sequence."""

    NORMAL = 0
    LOOP_START = 1
    LOOP_END = 2


@dataclass(frozen=True)
class MidiMessage:
    """A MIDI channel message or a loop marker."""

    channel: int = 0
    command: int = 0
    data1: int = 0
    data2: int = 0
    type: MessageType = MessageType.NORMAL


class _Synthesizer(Protocol):
    block_size: int
    sample_rate: int

    def reset(self) -> None: ...

    def render(self, count: int) -> tuple[Sequence[float], Sequence[float]]: ...

    def process_midi_message(
        self, channel: int, command: int, data1: int, data2: int
    ) -> None: ...

    def note_off_all(self, immediate: bool) -> None: ...


class _MidiFile(Protocol):
    messages: Sequence[MidiMessage]
    times: Sequence[float]


class MidiFileSequencer:
    """Feeds the messages of a MIDI file to a synthesizer in time."""

    def __init__(self, synthesizer: _Synthesizer) -> None:
        self._synthesizer = synthesizer
        self._speed = 1.0
        self._midi_file: _MidiFile | None = None
        self._play_loop = False
        self._block_wrote = 0
        self._current_time = 0.0
        self._msg_index = 0
        self._loop_index = 0

    def play(self, midi_file: _MidiFile, play_loop: bool = False) -> None:
        """Start playing ``midi_file`` from the beginning."""
        self._midi_file = midi_file
        self._play_loop = play_loop
        self._block_wrote = self._synthesizer.block_size
        self._current_time = 0.0
        self._msg_index = 0
        self._loop_index = 0
        self._synthesizer.reset()

    def stop(self) -> None:
        """Stop playing and reset the synthesizer."""
        self._midi_file = None
        self._synthesizer.reset()

    def render(self, count: int) -> tuple[list[float], list[float]]:
        """Render ``count`` stereo samples and return the left and right channels."""
        synth = self._synthesizer
        left: list[float] = []
        right: list[float] = []
        while len(left) < count:
            if self._block_wrote == synth.block_size:
                self._process_events()
                self._block_wrote = 0
                self._current_time += (
                    self._speed * synth.block_size / synth.sample_rate
                )
            rem = min(synth.block_size - self._block_wrote, count - len(left))
            block_left, block_right = synth.render(rem)
            left.extend(block_left)
            right.extend(block_right)
            self._block_wrote += rem
        return left, right

    def _rewind_to_loop(self, midi_file: _MidiFile) -> None:
        self._current_time = midi_file.times[self._loop_index]
        self._msg_index = self._loop_index
        self._synthesizer.note_off_all(False)

    def _process_events(self) -> None:
        midi_file = self._midi_file
        if midi_file is None:
            return

        messages = midi_file.messages
        while self._msg_index < len(messages):
            if midi_file.times[self._msg_index] > self._current_time:
                break
            msg = messages[self._msg_index]
            if msg.type == MessageType.NORMAL:
                self._synthesizer.process_midi_message(
                    msg.channel, msg.command, msg.data1, msg.data2
                )
            elif self._play_loop:
                if msg.type == MessageType.LOOP_START:
                    self._loop_index = self._msg_index
                elif msg.type == MessageType.LOOP_END:
                    self._rewind_to_loop(midi_file)
            self._msg_index += 1

        if self._msg_index == len(messages) and self._play_loop:
            self._rewind_to_loop(midi_file)

    @property
    def synthesizer(self) -> Any:
        """The synthesizer driven by the sequencer."""
        return self._synthesizer

    @property
    def midi_file(self) -> _MidiFile | None:
        """The MIDI file being played, or None."""
        return self._midi_file

    @property
    def position(self) -> float:
        """Current playback position in seconds."""
        return self._current_time

    @property
    def end_of_sequence(self) -> bool:
        """True when nothing is playing or every message has been sent."""
        if self._midi_file is None:
            return True
        return self._msg_index == len(self._midi_file.messages)

    @property
    def speed(self) -> float:
        """Playback speed multiplier; defaults to 1."""
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        if value < 0:
            raise ValueError("The playback speed must be a non-negative value.")
        self._speed = value