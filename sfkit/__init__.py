"""SoundFont building blocks: chunk record readers, an oscillator, a modulation envelope, a reverb and a MIDI file sequencer."""

__version__ = "0.1.0"

__all__ = [
    "reader",
    "sample_header",
    "preset_info",
    "oscillator",
    "modulation_envelope",
    "reverb",
    "sequencer",
]