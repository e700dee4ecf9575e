# tests/test_registry.py
from __future__ import annotations

import pytest

from toutf8 import registry
from toutf8.errors import (
    InvalidNameError,
    UnknownEncodingError,
    UnsupportedEncodingError,
)
from toutf8.registry import (
    get_charset_name_from_encoding,
    get_decoder_from_charset_name,
    get_encoding_from_charset_name,
    normalize_label,
)
from toutf8.transcoder import to_utf8_with_charset_name
from toutf8.transform import NOP_ENCODING, Encoding, Nop


@pytest.mark.parametrize(
    ("label", "name"),
    [
        ("utf-8", "UTF-8"),
        ("UTF8", "UTF-8"),
        ("  Latin1 ", "windows-1252"),
        ("iso-8859-1", "windows-1252"),
        ("gbk", "GBK"),
        ("gb2312", "GBK"),
        ("GB18030", "gb18030"),
        ("big5", "Big5"),
        ("shift_jis", "Shift_JIS"),
        ("euc-kr", "EUC-KR"),
        ("koi8-r", "KOI8-R"),
        ("utf-16be", "UTF-16BE"),
        ("utf-16le", "UTF-16LE"),
        ("x-mac-cyrillic", "x-mac-cyrillic"),
    ],
)
def test_html_labels(label: str, name: str) -> None:
    assert get_encoding_from_charset_name(label).name == name


@pytest.mark.parametrize(
    ("label", "name"),
    [
        ("iso-2022-kr", "ISO-2022-KR"),
        ("hz", "HZ-GB-2312"),
        ("cp437", "IBM437"),
        ("utf-7", "UTF-7"),
        ("iso2022_jp_2", "ISO-2022-JP-2"),
    ],
)
def test_iana_labels(label: str, name: str) -> None:
    assert get_encoding_from_charset_name(label).name == name


@pytest.mark.parametrize("label", ["gb-18030", "GB_18030", "gb 18030"])
def test_gb18030_aliases(label: str) -> None:
    assert get_encoding_from_charset_name(label).name == "gb18030"


@pytest.mark.parametrize(
    "label",
    ["utf-32-le", "UTF_32_LE", "utf32le", "utf-32le", "utf32-le", "utf_32le"],
)
def test_utf32le_aliases(label: str) -> None:
    assert get_encoding_from_charset_name(label).name == "UTF-32LE"


@pytest.mark.parametrize("label", ["utf-32-be", "utf32be", "utf_32-be"])
def test_utf32be_aliases(label: str) -> None:
    assert get_encoding_from_charset_name(label).name == "UTF-32BE"


def test_utf32_keeps_bom() -> None:
    data = b"\xff\xfe\x00\x00A\x00\x00\x00"
    assert to_utf8_with_charset_name(data, "utf-32-le") == b"\xef\xbb\xbfA"


@pytest.mark.parametrize(
    ("label", "data"),
    [
        ("utf-16be", b"\xfe\xff\x00A"),
        ("utf-16le", b"\xff\xfeA\x00"),
        ("utf-8", b"\xef\xbb\xbfA"),
        ("utf-8-sig", b"\xef\xbb\xbfA"),
        ("utf-16", b"\xfe\xff\x00A"),
        ("utf-16", b"\xff\xfeA\x00"),
    ],
)
def test_bom_is_dropped(label: str, data: bytes) -> None:
    assert to_utf8_with_charset_name(data, label) == b"A"


@pytest.mark.parametrize("label", ["", "   ", "x-no-such-charset", "rot13", "base64"])
def test_unknown_labels(label: str) -> None:
    with pytest.raises(InvalidNameError) as exc_info:
        get_encoding_from_charset_name(label)
    assert exc_info.value.name == label


def test_non_string_label() -> None:
    with pytest.raises(InvalidNameError):
        get_encoding_from_charset_name(None)  # type: ignore[arg-type]


def test_decoders_are_fresh() -> None:
    assert get_decoder_from_charset_name("gbk") is not get_decoder_from_charset_name(
        "gbk"
    )


def test_one_handle_per_registry_entry() -> None:
    assert get_encoding_from_charset_name("GBK") is get_encoding_from_charset_name(
        "gbk"
    )


def test_unknown_labels_are_not_retained() -> None:
    get_encoding_from_charset_name("utf-8")
    before = registry._codec_encoding.cache_info().currsize
    for i in range(1000):
        with pytest.raises(InvalidNameError):
            get_encoding_from_charset_name(f"x-bogus-{i}")
    assert registry._codec_encoding.cache_info().currsize == before


@pytest.mark.parametrize("label", ["utf 8", "utf_8", "latin 1", "iso_8859_1"])
def test_loose_codec_spellings_are_rejected(label: str) -> None:
    with pytest.raises(InvalidNameError):
        get_encoding_from_charset_name(label)


@pytest.mark.parametrize(
    ("label", "name"),
    [
        ("latin_1", "ISO-8859-1"),
        ("iso8859-1", "windows-1252"),
        ("euc_jp", "EUC-JP"),
        ("macroman", "macintosh"),
        ("MacCyrillic", "x-mac-cyrillic"),
        ("CP949", "EUC-KR"),
    ],
)
def test_canonical_codec_spellings(label: str, name: str) -> None:
    assert get_encoding_from_charset_name(label).name == name


def test_codec_spelling_of_whatwg_encoding_strips_bom() -> None:
    assert get_encoding_from_charset_name("utf-16-be").name == "UTF-16BE"
    assert to_utf8_with_charset_name(b"\xfe\xff\x00A", "utf-16-be") == b"A"
    assert to_utf8_with_charset_name(b"\xff\xfeA\x00", "utf-16-le") == b"A"


def test_normalize_label() -> None:
    assert normalize_label("  UTF-8\n") == "utf-8"


# ---------------------------------------------------------------------------
# Reverse lookup
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("label", "name"),
    [
        ("utf-8", "UTF-8"),
        ("latin1", "windows-1252"),
        ("shift_jis", "Windows-31J"),
        ("euc-jp", "EUC-JP"),
        ("koi8-r", "KOI8-R"),
        ("utf-32-le", "UTF-32LE"),
        ("gb18030", "GB18030"),
        ("big5", "Big5-HKSCS"),
    ],
)
def test_iana_name_wins(label: str, name: str) -> None:
    encoding = get_encoding_from_charset_name(label)
    assert get_charset_name_from_encoding(encoding) == name


def test_html_name_is_the_fallback() -> None:
    encoding = get_encoding_from_charset_name("x-mac-cyrillic")
    assert get_charset_name_from_encoding(encoding) == "x-mac-cyrillic"


def test_unsupported_encoding() -> None:
    encoding = Encoding(name="rot13", codec="rot13", factory=Nop)
    with pytest.raises(UnsupportedEncodingError, match="not supported"):
        get_charset_name_from_encoding(encoding)


def test_unknown_encoding() -> None:
    encoding = Encoding(name="mystery", codec="x-no-such-codec", factory=Nop)
    with pytest.raises(UnknownEncodingError):
        get_charset_name_from_encoding(encoding)


def test_nop_encoding_is_unknown() -> None:
    with pytest.raises(UnknownEncodingError):
        get_charset_name_from_encoding(NOP_ENCODING)
