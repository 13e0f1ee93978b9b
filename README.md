# sfkit

Pure-Python building blocks for a SoundFont (SF2) synthesizer. The package has no dependencies outside the standard library.

## Modules

### `sfkit.reader`

`ReadCounter(stream)` wraps a binary stream. `read(size)` passes the read through to the stream. `bytes_read()` returns the total number of bytes read through the wrapper so far.

### `sfkit.sample_header`

- `read_sample_header(stream)` reads one 46-byte record and returns a frozen `SampleHeader` dataclass. Its fields are `name`, `start`, `end`, `start_loop`, `end_loop`, `sample_rate`, `original_pitch`, `pitch_correction`, `link` and `sample_type`.
- `read_sample_headers(stream, size)` reads a whole `shdr` list of `size` bytes and drops the terminating record.
- `InvalidSampleHeaderListError` (a `ValueError`) is raised when `size` is not a positive multiple of 46.
- `EOFError` is raised when the stream ends in the middle of a record.

### `sfkit.preset_info`

- `read_preset_info(stream)` reads one 38-byte record and returns a frozen `PresetInfo`. Its `zone_end_index` is set to 0.
- `read_preset_infos(stream, size)` reads a whole `phdr` list, terminator included. Each preset's `zone_end_index` is set to the next preset's `zone_start_index - 1`.
- `InvalidPresetListError` (a `ValueError`) is raised when `size` is not a positive multiple of 38.
- `EOFError` is raised when the stream ends in the middle of a record.

### `sfkit.oscillator`

`Oscillator(sample_rate)` plays back 16-bit sample data using 24-bit fixed-point positions and linear interpolation.

- `start(loop_mode, sample_rate, start, end, start_loop, end_loop, root_key, coarse_tune, fine_tune, scale_tuning)` sets up playback.
- `process(data, block_size, pitch)` returns a list of `block_size` floats. If the non-looping sample ended before the block began, it returns `None`.
- `release()` stops looping when the mode is `LoopMode.LOOP_UNTIL_NOTE_OFF`.
- `LoopMode` has the members `NO_LOOP`, `CONTINUOUS` and `LOOP_UNTIL_NOTE_OFF`.

### `sfkit.modulation_envelope`

`ModulationEnvelope(sample_rate, non_audible=1e-3)` is a delay/attack/hold/decay/sustain/release envelope.

- `start(delay, attack, hold, decay, sustain, release)` takes times in seconds. The sustain level is clamped to 0–1.
- `process(sample_count)` advances the envelope. In the decay and release stages it returns `False` once the level falls to `non_audible` or below.
- `release()` enters the release stage.
- `value()` returns the current level.
- The stages are listed in `EnvelopeStage`.

### `sfkit.reverb`

`Reverb(sample_rate)` is a stereo reverb. Each side has eight parallel `CombFilter`s followed by four `AllPassFilter`s, with delay lengths scaled from 44.1 kHz.

- `process(input_block)` takes a mono block and returns `(left, right)` lists.
- `input_gain()` returns the gain (0.015) to apply to the signal fed into the reverb.
- `mute()` clears all filter state.

### `sfkit.sequencer`

`MidiFileSequencer(synthesizer)` feeds timed messages to a synthesizer.

The synthesizer object must provide:

- `block_size` and `sample_rate`;
- `reset()`;
- `render(count)`, returning left and right sequences;
- `process_midi_message(channel, command, data1, data2)`;
- `note_off_all(immediate)`.

The MIDI file object must provide `messages`, a sequence of `MidiMessage`, and `times`, a sequence of seconds.

The sequencer's methods and properties are:

- `play(midi_file, play_loop=False)` starts playback from the beginning and resets the synthesizer.
- `stop()` ends playback and resets the synthesizer.
- `render(count)` returns `(left, right)` lists of `count` samples.
- The properties `synthesizer`, `midi_file`, `position` and `end_of_sequence` report on playback.
- `speed` can be set. A negative value raises `ValueError`.

In loop mode, `MessageType.LOOP_START` and `MessageType.LOOP_END` markers set the loop point and jump back to it. Playback also returns to the loop point at the end of the message list.

## Example

```python
import io

from sfkit.oscillator import LoopMode, Oscillator
from sfkit.preset_info import read_preset_infos

with open("bank.phdr", "rb") as f:
    data = f.read()
presets = read_preset_infos(io.BytesIO(data), len(data))
for preset in presets[:-1]:  # the last record is the terminator
    print(preset.name, preset.bank_number, preset.patch_number)

samples = [(i % 100) * 300 for i in range(101)]
osc = Oscillator(44100)
osc.start(LoopMode.NO_LOOP, 44100, 0, 100, 0, 0, 60, 0, 0, 100)
block = osc.process(samples, 64, 60.0)
```

## What the package does not do

sfkit provides none of the following:

- a reader for whole SF2 files;
- the preset, instrument or zone objects built from those files;
- a MIDI file parser;
- a synthesizer;
- audio output.

`MidiFileSequencer` works with any synthesizer and MIDI file objects of the shape described above. The readers work on streams positioned at the start of the chunk data.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```