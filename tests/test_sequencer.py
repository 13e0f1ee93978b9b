from dataclasses import dataclass, field

import pytest

from sfkit.sequencer import MessageType, MidiFileSequencer, MidiMessage


class FakeSynth:
    block_size = 64
    sample_rate = 256  # one block is 0.25 s

    def __init__(self):
        self.resets = 0
        self.render_sizes = []
        self.midi = []
        self.note_offs = 0

    def reset(self):
        self.resets += 1

    def render(self, count):
        self.render_sizes.append(count)
        return [0.5] * count, [-0.5] * count

    def process_midi_message(self, channel, command, data1, data2):
        self.midi.append((channel, command, data1, data2))

    def note_off_all(self, immediate):
        self.note_offs += 1


@dataclass
class FakeMidiFile:
    messages: list = field(default_factory=list)
    times: list = field(default_factory=list)


def note(n):
    return MidiMessage(channel=0, command=0x90, data1=n, data2=100)


def linear_file():
    return FakeMidiFile([note(60), note(62), note(64)], [0.0, 0.5, 1.0])


def test_initial_state():
    seq = MidiFileSequencer(FakeSynth())
    assert seq.midi_file is None
    assert seq.end_of_sequence
    assert seq.position == 0.0
    assert seq.speed == 1.0


def test_play_resets_synthesizer():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    midi = linear_file()
    seq.play(midi, False)
    assert synth.resets == 1
    assert seq.midi_file is midi
    assert seq.synthesizer is synth
    assert not seq.end_of_sequence


def test_render_returns_requested_length_and_splits_blocks():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    seq.play(linear_file(), False)
    left, right = seq.render(100)
    assert len(left) == 100
    assert len(right) == 100
    assert left[0] == 0.5 and right[0] == -0.5
    assert synth.render_sizes == [64, 36]
    assert seq.position == 0.5


def test_messages_sent_in_time():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    seq.play(linear_file(), False)
    seq.render(64)
    assert [m[2] for m in synth.midi] == [60]
    seq.render(64)
    assert [m[2] for m in synth.midi] == [60]
    seq.render(64)
    assert [m[2] for m in synth.midi] == [60, 62]
    seq.render(128)
    assert [m[2] for m in synth.midi] == [60, 62, 64]
    assert seq.end_of_sequence


def test_speed_scales_position():
    seq = MidiFileSequencer(FakeSynth())
    seq.speed = 2.0
    seq.play(linear_file(), False)
    seq.render(64)
    assert seq.position == 0.5


def test_negative_speed_rejected():
    seq = MidiFileSequencer(FakeSynth())
    with pytest.raises(ValueError):
        seq.speed = -1.0
    assert seq.speed == 1.0


def test_stop():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    seq.play(linear_file(), False)
    seq.stop()
    assert seq.midi_file is None
    assert seq.end_of_sequence
    assert synth.resets == 2
    left, _ = seq.render(10)
    assert len(left) == 10
    assert synth.midi == []


def looped_file():
    return FakeMidiFile(
        [
            note(60),
            MidiMessage(type=MessageType.LOOP_START),
            note(62),
            MidiMessage(type=MessageType.LOOP_END),
        ],
        [0.0, 0.25, 0.5, 0.75],
    )


def test_loop_markers_repeat_section():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    seq.play(looped_file(), True)
    seq.render(64 * 6)
    notes = [m[2] for m in synth.midi]
    assert notes[0] == 60
    assert notes.count(60) == 1
    assert notes.count(62) >= 2
    assert synth.note_offs >= 1
    assert not seq.end_of_sequence


def test_loop_markers_ignored_without_loop():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    seq.play(looped_file(), False)
    seq.render(64 * 6)
    assert [m[2] for m in synth.midi] == [60, 62]
    assert synth.note_offs == 0
    assert seq.end_of_sequence


def test_loop_whole_file_when_no_markers():
    synth = FakeSynth()
    seq = MidiFileSequencer(synth)
    seq.play(FakeMidiFile([note(60)], [0.0]), True)
    seq.render(64 * 3)
    assert [m[2] for m in synth.midi] == [60, 60, 60]
    assert synth.note_offs == 3
    assert not seq.end_of_sequence