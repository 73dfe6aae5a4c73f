"""The decoder ring: directory GUIDs in, canonical GUIDs out.

Directories disagree on how a 128-bit GUID travels over LDAP. Active
Directory sends the Microsoft mixed-endian structure (first three fields
little-endian), eDirectory sends the same structure big-endian throughout,
and OpenLDAP sends the textual 8-4-4-4-12 form. Every decoder here returns
the same thing: 32 lowercase hex digits, no separators.

The decoder for a filter is picked once from its encoding
(``decoder_for``) and then called per value without further dispatch.
"""

from __future__ import annotations

import base64
import re
import struct
from dataclasses import dataclass

from genuniqueid.errors import DecodeError

# One struct format per GUID field, in wire order.
MIXED_ENDIAN = ("<I", "<H", "<H", ">H", ">H", ">I")
BIG_ENDIAN = (">I", ">H", ">H", ">H", ">H", ">I")

_UUID_PATTERN = re.compile(
    r"([0-9a-f]{8})-?([0-9a-f]{4})-?([0-9a-f]{4})-?([0-9a-f]{4})-?([0-9a-f]{12})"
)
_NOT_ALNUM = re.compile(r"[^a-z0-9]")
_NOT_BASE64 = re.compile(r"[^A-Za-z0-9+/]")


@dataclass(frozen=True)
class BinaryGuidDecoder:
    """Base64-encoded 16-byte GUID with a per-field byte order."""

    layout: tuple[str, ...]
    strict: bool = False

    @property
    def size(self) -> int:
        return sum(struct.calcsize(fmt) for fmt in self.layout)

    def decode(self, raw: str, attribute: str) -> str:
        try:
            if not self.strict:
                raw = _NOT_BASE64.sub("", raw)
                raw += "=" * (-len(raw) % 4)
            buf = base64.b64decode(raw, validate=self.strict)
        except ValueError as e:
            raise DecodeError(attribute, str(e)) from e
        if len(buf) < self.size:
            raise DecodeError(
                attribute,
                f"expected {self.size} bytes, got {len(buf)}",
            )

        parts = []
        offset = 0
        for fmt in self.layout:
            width = struct.calcsize(fmt)
            (field,) = struct.unpack_from(fmt, buf, offset)
            parts.append(format(field, f"0{width * 2}x"))
            offset += width
        return "".join(parts)


@dataclass(frozen=True)
class TextUuidDecoder:
    """Textual UUID, hyphens optional, any case."""

    def decode(self, raw: str, attribute: str) -> str:
        m = _UUID_PATTERN.fullmatch(raw.lower())
        if m is None:
            raise DecodeError(attribute)
        return "".join(m.groups())


@dataclass(frozen=True)
class PassthroughDecoder:
    """Keep only lowercase alphanumerics. No validation at all."""

    def decode(self, raw: str, attribute: str) -> str:
        return _NOT_ALNUM.sub("", raw.lower())


ACTIVE_DIRECTORY = BinaryGuidDecoder(MIXED_ENDIAN)
EDIRECTORY = BinaryGuidDecoder(BIG_ENDIAN, strict=True)
OPENLDAP = TextUuidDecoder()
PASSTHROUGH = PassthroughDecoder()

# encoding -> (default source attribute, decoder)
ENCODINGS = {
    "microsoft": ("objectGUID", ACTIVE_DIRECTORY),
    "activedirectory": ("objectGUID", ACTIVE_DIRECTORY),
    "edirectory": ("guid", EDIRECTORY),
    "openldap": ("entryUUID", OPENLDAP),
}


def decoder_for(encoding: str):
    """Return the decoder for an encoding, passthrough if it is not known."""
    entry = ENCODINGS.get(encoding.lower())
    if entry is None:
        return PASSTHROUGH
    return entry[1]
