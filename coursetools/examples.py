"""Small worked examples: greetings, a birthday service and a block request."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, TextIO


def greeting(name: str) -> str:
    """Greet ``name``."""
    return f"Hello {name}, it is very nice to meet you!"


def analyze_numbers(x: int, y: int) -> str:
    """Print and return a comparison of two numbers."""
    if x < y:
        message = f"x ({x}) is smallest!"
    else:
        message = f"y ({y}) is probably larger than x ({x})"
    print(message)
    return message


@dataclass(frozen=True)
class BirthdayInfo:
    name: str
    years: int


class BirthdayInfoProvider(Protocol):
    def name(self) -> str: ...

    def years(self) -> int: ...


def _wish(name: str, years: int) -> str:
    return f"Happy Birthday {name}, congratulations with the {years} years!"


class BirthdayService:
    """Produces birthday wishes from several kinds of input."""

    def wish_happy_birthday(self, name: str, years: int) -> str:
        return _wish(name, years)

    def wish_with_info(self, info: BirthdayInfo) -> str:
        return _wish(info.name, info.years)

    def wish_with_provider(self, provider: BirthdayInfoProvider) -> str:
        return _wish(provider.name(), provider.years())

    def wish_from_file(self, info_file: TextIO) -> str:
        """Read a name and an age, one per line, from an open text file."""
        lines = info_file.read().splitlines()
        if len(lines) < 2:
            raise ValueError("birthday file must hold a name and a number of years")
        return _wish(lines[0], int(lines[1]))


class RequestType(IntEnum):
    IN = 0
    OUT = 1
    FLUSH = 4


@dataclass
class VirtioBlockRequest:
    """A virtio block device request header."""

    request_type: RequestType = RequestType.IN
    reserved: int = 0
    sector: int = 0

    def as_bytes(self) -> bytes:
        """Return the request's little-endian wire layout."""
        try:
            return struct.pack("<IIQ", int(self.request_type), self.reserved, self.sector)
        except struct.error as exc:
            raise ValueError(str(exc)) from exc