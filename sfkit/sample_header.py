"""Sample header records of a SoundFont ``shdr`` chunk."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

_RECORD = struct.Struct("<20s5iBbHH")
RECORD_SIZE = _RECORD.size  # 46 bytes


class InvalidSampleHeaderListError(ValueError):
    """The sample header list chunk has an invalid size."""

    def __init__(self) -> None:
        super().__init__("The sample header list is invalid.")


@dataclass(frozen=True)
class SampleHeader:
    """A sample in the SoundFont."""

    name: str
    start: int
    end: int
    start_loop: int
    end_loop: int
    sample_rate: int
    original_pitch: int
    pitch_correction: int
    link: int
    sample_type: int


def _decode_name(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("latin-1")


def read_sample_header(stream: BinaryIO) -> SampleHeader:
    """Read one 46-byte sample header record."""
    data = stream.read(RECORD_SIZE)
    if len(data) != RECORD_SIZE:
        raise EOFError("Unexpected end of stream while reading a sample header.")
    (
        name,
        start,
        end,
        start_loop,
        end_loop,
        sample_rate,
        original_pitch,
        pitch_correction,
        link,
        sample_type,
    ) = _RECORD.unpack(data)
    return SampleHeader(
        name=_decode_name(name),
        start=start,
        end=end,
        start_loop=start_loop,
        end_loop=end_loop,
        sample_rate=sample_rate,
        original_pitch=original_pitch,
        pitch_correction=pitch_correction,
        link=link,
        sample_type=sample_type,
    )


def read_sample_headers(stream: BinaryIO, size: int) -> list[SampleHeader]:
    """Read a sample header list of ``size`` bytes, dropping the terminator."""
    if size % RECORD_SIZE != 0 or size < RECORD_SIZE:
        raise InvalidSampleHeaderListError()
    count = size // RECORD_SIZE - 1
    headers = [read_sample_header(stream) for _ in range(count)]
    # The last one is the terminator.
    read_sample_header(stream)
    return headers