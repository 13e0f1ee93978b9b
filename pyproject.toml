[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sfkit"
version = "0.1.0"
description = "SoundFont building blocks: sample header and preset list readers, an oscillator, a modulation envelope, a reverb and a MIDI file sequencer"
requires-python = ">=3.10"
dependencies = []
keywords = ["soundfont", "sf2", "synthesizer", "midi", "reverb", "audio", "envelope"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sfkit"]

[tool.pytest.ini_options]
addopts = "-ra"
