"""Single-byte codepage tables and their table-driven decoders.

Each table holds the 128 scalars for bytes 0x80-0xFF; the lower half of
every supported codepage is ASCII.  The tables are read out of the Unicode
mapping data behind Python's charmap codecs the first time they are needed:
decoding ``bytes(range(0x80, 0x100))`` with ``errors="replace"`` yields one
character per byte, and U+FFFD wherever the codepage leaves a byte undefined.

These decoders are not reachable through charset-name resolution; pass
them explicitly, e.g.::

    to_utf8_with_encoding(data, codepages.KOI8_R)
    to_utf8_with_decoder(data, codepages.WINDOWS_1251.new_decoder())
"""

from __future__ import annotations

import dataclasses
import functools
import threading

from toutf8.enums import TransformStatus
from toutf8.errors import InvalidNameError
from toutf8.transform import Encoding, TransformResult
from toutf8.unicode import encode_utf8_into, utf8_len

# Lookup key -> (canonical name, Python codec holding the mapping).
_CODEPAGES: dict[str, tuple[str, str]] = {
    "windows-1250": ("windows-1250", "cp1250"),
    "windows-1251": ("windows-1251", "cp1251"),
    "windows-1252": ("windows-1252", "cp1252"),
    "windows-1254": ("windows-1254", "cp1254"),
    "windows-1255": ("windows-1255", "cp1255"),
    "windows-1256": ("windows-1256", "cp1256"),
    "iso-8859-1": ("ISO-8859-1", "latin_1"),
    "iso-8859-2": ("ISO-8859-2", "iso8859_2"),
    "iso-8859-3": ("ISO-8859-3", "iso8859_3"),
    "iso-8859-5": ("ISO-8859-5", "iso8859_5"),
    "iso-8859-6": ("ISO-8859-6", "iso8859_6"),
    "iso-8859-7": ("ISO-8859-7", "iso8859_7"),
    "iso-8859-9": ("ISO-8859-9", "iso8859_9"),
    "koi8-r": ("KOI8-R", "koi8_r"),
}

#: Names accepted by :func:`get_table` and :func:`codepage_encoding`.
CODEPAGES: tuple[str, ...] = tuple(_CODEPAGES)

_TABLE_SIZE = 128

_TABLE_CACHE: dict[str, CodepageTable] = {}
_TABLE_CACHE_LOCK = threading.Lock()


@dataclasses.dataclass(frozen=True, slots=True)
class CodepageTable:
    """The upper half of a single-byte codepage.

    ``chars[i]`` is the scalar that byte ``0x80 + i`` stands for.
    """

    name: str
    codec: str
    chars: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.chars) != _TABLE_SIZE:
            msg = f"{self.name}: expected {_TABLE_SIZE} entries, got {len(self.chars)}"
            raise ValueError(msg)

    def scalar(self, byte: int) -> int:
        """Return the scalar for a single *byte* value."""
        if byte < 0x80:
            return byte
        return self.chars[byte - 0x80]


def _normalize(name: str) -> str:
    return name.strip().lower().replace("_", "-")


def _build_table(key: str) -> CodepageTable:
    name, codec = _CODEPAGES[key]
    decoded = bytes(range(0x80, 0x100)).decode(codec, errors="replace")
    return CodepageTable(name=name, codec=codec, chars=tuple(map(ord, decoded)))


def get_table(name: str) -> CodepageTable:
    """Return the (memoized) table for codepage *name*.

    :raises ~toutf8.errors.InvalidNameError: If *name* is not one of
        :data:`CODEPAGES`.
    """
    key = _normalize(name)
    if key not in _CODEPAGES:
        raise InvalidNameError(name)
    table = _TABLE_CACHE.get(key)
    if table is not None:
        return table
    with _TABLE_CACHE_LOCK:
        table = _TABLE_CACHE.get(key)
        if table is None:
            table = _build_table(key)
            _TABLE_CACHE[key] = table
    return table


class CodepageDecoder:
    """Stateless, table-driven decoder for a single-byte codepage."""

    def __init__(self, table: CodepageTable) -> None:
        self.table = table

    def reset(self) -> None:
        pass

    def transform(
        self,
        src: bytes | bytearray | memoryview,
        dst: bytearray | memoryview,
        at_eof: bool = False,
    ) -> TransformResult:
        chars = self.table.chars
        limit = len(dst)
        n_src = n_dst = 0
        for byte in src:
            if byte < 0x80:
                if n_dst >= limit:
                    return TransformResult(n_src, n_dst, TransformStatus.SHORT_DST)
                dst[n_dst] = byte
                n_dst += 1
            else:
                scalar = chars[byte - 0x80]
                if n_dst + utf8_len(scalar) > limit:
                    return TransformResult(n_src, n_dst, TransformStatus.SHORT_DST)
                n_dst += encode_utf8_into(dst, n_dst, scalar)
            n_src += 1
        return TransformResult(n_src, n_dst, TransformStatus.OK)

    def __repr__(self) -> str:
        return f"CodepageDecoder({self.table.name!r})"


def _new_decoder(key: str) -> CodepageDecoder:
    return CodepageDecoder(get_table(key))


def codepage_encoding(name: str) -> Encoding:
    """Return an :class:`~toutf8.transform.Encoding` for codepage *name*.

    The table itself is only built when the first decoder is created.
    """
    key = _normalize(name)
    if key not in _CODEPAGES:
        raise InvalidNameError(name)
    canonical, codec = _CODEPAGES[key]
    return Encoding(
        name=canonical, codec=codec, factory=functools.partial(_new_decoder, key)
    )


WINDOWS_1250 = codepage_encoding("windows-1250")
WINDOWS_1251 = codepage_encoding("windows-1251")
WINDOWS_1252 = codepage_encoding("windows-1252")
WINDOWS_1254 = codepage_encoding("windows-1254")
WINDOWS_1255 = codepage_encoding("windows-1255")
WINDOWS_1256 = codepage_encoding("windows-1256")
ISO_8859_1 = codepage_encoding("iso-8859-1")
ISO_8859_2 = codepage_encoding("iso-8859-2")
ISO_8859_3 = codepage_encoding("iso-8859-3")
ISO_8859_5 = codepage_encoding("iso-8859-5")
ISO_8859_6 = codepage_encoding("iso-8859-6")
ISO_8859_7 = codepage_encoding("iso-8859-7")
ISO_8859_9 = codepage_encoding("iso-8859-9")
KOI8_R = codepage_encoding("koi8-r")
