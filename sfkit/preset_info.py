"""Preset header records of a SoundFont ``phdr`` chunk."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

_RECORD = struct.Struct("<20s3H3i")
RECORD_SIZE = _RECORD.size  # 38 bytes


class InvalidPresetListError(ValueError):
    """The preset list chunk has an invalid size."""

    def __init__(self) -> None:
        super().__init__("The preset list is invalid.")


@dataclass(frozen=True)
class PresetInfo:
    """Raw preset header as stored in the SoundFont."""

    name: str
    patch_number: int
    bank_number: int
    zone_start_index: int
    zone_end_index: int
    library: int
    genre: int
    morphology: int


def read_preset_info(stream: BinaryIO) -> PresetInfo:
    """Read one 38-byte preset header; its zone end index is left at 0."""
    data = stream.read(RECORD_SIZE)
    if len(data) != RECORD_SIZE:
        raise EOFError("Unexpected end of stream while reading a preset header.")
    name, patch, bank, zone_start, library, genre, morphology = _RECORD.unpack(data)
    return PresetInfo(
        name=name.split(b"\x00", 1)[0].decode("latin-1"),
        patch_number=patch,
        bank_number=bank,
        zone_start_index=zone_start,
        zone_end_index=0,
        library=library,
        genre=genre,
        morphology=morphology,
    )


def read_preset_infos(stream: BinaryIO, size: int) -> list[PresetInfo]:
    """Read a preset list of ``size`` bytes, terminator included.

    Each preset's zone end index is set from the next preset's start index.
    """
    if size % RECORD_SIZE != 0 or size < RECORD_SIZE:
        raise InvalidPresetListError()
    raw = [read_preset_info(stream) for _ in range(size // RECORD_SIZE)]
    linked = [
        PresetInfo(
            name=cur.name,
            patch_number=cur.patch_number,
            bank_number=cur.bank_number,
            zone_start_index=cur.zone_start_index,
            zone_end_index=nxt.zone_start_index - 1,
            library=cur.library,
            genre=cur.genre,
            morphology=cur.morphology,
        )
        for cur, nxt in zip(raw, raw[1:])
    ]
    linked.append(raw[-1])
    return linked