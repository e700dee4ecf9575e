"""Charset name resolution.

A label is resolved in three steps:

1. A short explicit alias table, for spellings neither registry knows
   (``gb-18030``, the ``utf-32-le`` family, ...).
2. The HTML registry: the labels of the WHATWG Encoding Standard
   (https://encoding.spec.whatwg.org/#names-and-labels).
3. The IANA registry: any label Python's codec registry resolves to a
   codec that has an IANA preferred name
   (http://www.iana.org/assignments/character-sets/character-sets.xhtml).

The reverse direction (encoding to canonical name) asks IANA first and
then HTML.
"""

from __future__ import annotations

import codecs
import functools
import logging

from toutf8.errors import (
    InvalidNameError,
    UnknownEncodingError,
    UnsupportedEncodingError,
)
from toutf8.transform import Encoding, Transformer
from toutf8.transform.codec import CodecDecoder

logger = logging.getLogger(__name__)

# Canonical WHATWG name -> (Python codec, labels).  Decoders follow the
# Encoding Standard: GBK decodes as gb18030, Shift_JIS as Windows-31J,
# EUC-KR as the UHC superset.  iso-2022-kr is deliberately absent (WHATWG
# maps it to the "replacement" encoding) so that it reaches the IANA step.
_HTML_ENCODINGS: dict[str, tuple[str, tuple[str, ...]]] = {
    "UTF-8": (
        "utf-8",
        (
            "unicode-1-1-utf-8",
            "unicode11utf8",
            "unicode20utf8",
            "utf-8",
            "utf8",
            "x-unicode20utf8",
        ),
    ),
    "IBM866": ("cp866", ("866", "cp866", "csibm866", "ibm866")),
    "ISO-8859-2": (
        "iso8859_2",
        (
            "csisolatin2",
            "iso-8859-2",
            "iso-ir-101",
            "iso8859-2",
            "iso88592",
            "iso_8859-2",
            "iso_8859-2:1987",
            "l2",
            "latin2",
        ),
    ),
    "ISO-8859-3": (
        "iso8859_3",
        (
            "csisolatin3",
            "iso-8859-3",
            "iso-ir-109",
            "iso8859-3",
            "iso88593",
            "iso_8859-3",
            "iso_8859-3:1988",
            "l3",
            "latin3",
        ),
    ),
    "ISO-8859-4": (
        "iso8859_4",
        (
            "csisolatin4",
            "iso-8859-4",
            "iso-ir-110",
            "iso8859-4",
            "iso88594",
            "iso_8859-4",
            "iso_8859-4:1988",
            "l4",
            "latin4",
        ),
    ),
    "ISO-8859-5": (
        "iso8859_5",
        (
            "csisolatincyrillic",
            "cyrillic",
            "iso-8859-5",
            "iso-ir-144",
            "iso8859-5",
            "iso88595",
            "iso_8859-5",
            "iso_8859-5:1988",
        ),
    ),
    "ISO-8859-6": (
        "iso8859_6",
        (
            "arabic",
            "asmo-708",
            "csiso88596e",
            "csiso88596i",
            "csisolatinarabic",
            "ecma-114",
            "iso-8859-6",
            "iso-8859-6-e",
            "iso-8859-6-i",
            "iso-ir-127",
            "iso8859-6",
            "iso88596",
            "iso_8859-6",
            "iso_8859-6:1987",
        ),
    ),
    "ISO-8859-7": (
        "iso8859_7",
        (
            "csisolatingreek",
            "ecma-118",
            "elot_928",
            "greek",
            "greek8",
            "iso-8859-7",
            "iso-ir-126",
            "iso8859-7",
            "iso88597",
            "iso_8859-7",
            "iso_8859-7:1987",
            "sun_eu_greek",
        ),
    ),
    "ISO-8859-8": (
        "iso8859_8",
        (
            "csiso88598e",
            "csisolatinhebrew",
            "hebrew",
            "iso-8859-8",
            "iso-8859-8-e",
            "iso-ir-138",
            "iso8859-8",
            "iso88598",
            "iso_8859-8",
            "iso_8859-8:1988",
            "visual",
        ),
    ),
    "ISO-8859-10": (
        "iso8859_10",
        (
            "csisolatin6",
            "iso-8859-10",
            "iso-ir-157",
            "iso8859-10",
            "iso885910",
            "l6",
            "latin6",
        ),
    ),
    "ISO-8859-13": (
        "iso8859_13",
        ("iso-8859-13", "iso8859-13", "iso885913"),
    ),
    "ISO-8859-14": (
        "iso8859_14",
        ("iso-8859-14", "iso8859-14", "iso885914"),
    ),
    "ISO-8859-15": (
        "iso8859_15",
        (
            "csisolatin9",
            "iso-8859-15",
            "iso8859-15",
            "iso885915",
            "iso_8859-15",
            "l9",
        ),
    ),
    "ISO-8859-16": ("iso8859_16", ("iso-8859-16",)),
    "KOI8-R": ("koi8_r", ("cskoi8r", "koi", "koi8", "koi8-r", "koi8_r")),
    "KOI8-U": ("koi8_u", ("koi8-ru", "koi8-u")),
    "macintosh": (
        "mac_roman",
        ("csmacintosh", "mac", "macintosh", "x-mac-roman"),
    ),
    "windows-874": (
        "cp874",
        (
            "dos-874",
            "iso-8859-11",
            "iso8859-11",
            "iso885911",
            "tis-620",
            "windows-874",
        ),
    ),
    "windows-1250": ("cp1250", ("cp1250", "windows-1250", "x-cp1250")),
    "windows-1251": ("cp1251", ("cp1251", "windows-1251", "x-cp1251")),
    "windows-1252": (
        "cp1252",
        (
            "ansi_x3.4-1968",
            "ascii",
            "cp1252",
            "cp819",
            "csisolatin1",
            "ibm819",
            "iso-8859-1",
            "iso-ir-100",
            "iso8859-1",
            "iso88591",
            "iso_8859-1",
            "iso_8859-1:1987",
            "l1",
            "latin1",
            "us-ascii",
            "windows-1252",
            "x-cp1252",
        ),
    ),
    "windows-1253": ("cp1253", ("cp1253", "windows-1253", "x-cp1253")),
    "windows-1254": (
        "cp1254",
        (
            "cp1254",
            "csisolatin5",
            "iso-8859-9",
            "iso-ir-148",
            "iso8859-9",
            "iso88599",
            "iso_8859-9",
            "iso_8859-9:1989",
            "l5",
            "latin5",
            "windows-1254",
            "x-cp1254",
        ),
    ),
    "windows-1255": ("cp1255", ("cp1255", "windows-1255", "x-cp1255")),
    "windows-1256": ("cp1256", ("cp1256", "windows-1256", "x-cp1256")),
    "windows-1257": ("cp1257", ("cp1257", "windows-1257", "x-cp1257")),
    "windows-1258": ("cp1258", ("cp1258", "windows-1258", "x-cp1258")),
    "x-mac-cyrillic": ("mac_cyrillic", ("x-mac-cyrillic", "x-mac-ukrainian")),
    "gb18030": ("gb18030", ("gb18030",)),
    "GBK": (
        "gb18030",
        (
            "chinese",
            "csgb2312",
            "csiso58gb231280",
            "gb2312",
            "gb_2312",
            "gb_2312-80",
            "gbk",
            "iso-ir-58",
            "x-gbk",
        ),
    ),
    "Big5": (
        "big5hkscs",
        ("big5", "big5-hkscs", "cn-big5", "csbig5", "x-x-big5"),
    ),
    "EUC-JP": ("euc_jp", ("cseucpkdfmtjapanese", "euc-jp", "x-euc-jp")),
    "ISO-2022-JP": ("iso2022_jp", ("csiso2022jp", "iso-2022-jp")),
    "Shift_JIS": (
        "cp932",
        (
            "csshiftjis",
            "ms932",
            "ms_kanji",
            "shift-jis",
            "shift_jis",
            "sjis",
            "windows-31j",
            "x-sjis",
        ),
    ),
    "EUC-KR": (
        "cp949",
        (
            "cseuckr",
            "csksc56011987",
            "euc-kr",
            "iso-ir-149",
            "korean",
            "ks_c_5601-1987",
            "ks_c_5601-1989",
            "ksc5601",
            "ksc_5601",
            "windows-949",
        ),
    ),
    "UTF-16BE": ("utf-16-be", ("unicodefffe", "utf-16be")),
    "UTF-16LE": (
        "utf-16-le",
        (
            "csunicode",
            "iso-10646-ucs-2",
            "ucs-2",
            "unicode",
            "unicodefeff",
            "utf-16",
            "utf-16le",
        ),
    ),
}

# The Encoding Standard's decode algorithm drops a leading BOM for these.
_HTML_STRIP_BOM: frozenset[str] = frozenset({"UTF-8", "UTF-16BE", "UTF-16LE"})

# Python codec -> IANA preferred (MIME) name.
_IANA_PREFERRED: dict[str, str] = {
    "ascii": "US-ASCII",
    "utf-7": "UTF-7",
    "utf-8": "UTF-8",
    "utf-16": "UTF-16",
    "utf-16-be": "UTF-16BE",
    "utf-16-le": "UTF-16LE",
    "utf-32": "UTF-32",
    "utf-32-be": "UTF-32BE",
    "utf-32-le": "UTF-32LE",
    "latin_1": "ISO-8859-1",
    "iso8859_2": "ISO-8859-2",
    "iso8859_3": "ISO-8859-3",
    "iso8859_4": "ISO-8859-4",
    "iso8859_5": "ISO-8859-5",
    "iso8859_6": "ISO-8859-6",
    "iso8859_7": "ISO-8859-7",
    "iso8859_8": "ISO-8859-8",
    "iso8859_9": "ISO-8859-9",
    "iso8859_10": "ISO-8859-10",
    "iso8859_13": "ISO-8859-13",
    "iso8859_14": "ISO-8859-14",
    "iso8859_15": "ISO-8859-15",
    "iso8859_16": "ISO-8859-16",
    "cp1250": "windows-1250",
    "cp1251": "windows-1251",
    "cp1252": "windows-1252",
    "cp1253": "windows-1253",
    "cp1254": "windows-1254",
    "cp1255": "windows-1255",
    "cp1256": "windows-1256",
    "cp1257": "windows-1257",
    "cp1258": "windows-1258",
    "cp874": "windows-874",
    "cp437": "IBM437",
    "cp850": "IBM850",
    "cp866": "IBM866",
    "koi8_r": "KOI8-R",
    "koi8_u": "KOI8-U",
    "tis_620": "TIS-620",
    "mac_roman": "macintosh",
    "gb18030": "GB18030",
    "gbk": "GBK",
    "gb2312": "GB2312",
    "hz": "HZ-GB-2312",
    "big5": "Big5",
    "big5hkscs": "Big5-HKSCS",
    "euc_jp": "EUC-JP",
    "shift_jis": "Shift_JIS",
    "cp932": "Windows-31J",
    "iso2022_jp": "ISO-2022-JP",
    "iso2022_jp_2": "ISO-2022-JP-2",
    "euc_kr": "EUC-KR",
    "iso2022_kr": "ISO-2022-KR",
}

_UTF32LE_ALIASES = (
    "utf-32-le",
    "utf_32_le",
    "utf-32_le",
    "utf_32-le",
    "utf32le",
    "utf-32le",
    "utf32-le",
    "utf_32le",
    "utf32_le",
)
_UTF32BE_ALIASES = tuple(a.replace("le", "be") for a in _UTF32LE_ALIASES)

# Labels resolved before either registry is consulted.  A string value is
# a replacement label; an (name, codec) pair is a final answer.  UTF-32 is
# decoded with the BOM left in place (it comes out as U+FEFF).  "utf-16"
# means "sniff the BOM", not the WHATWG reading of UTF-16LE; "utf-8-sig" is
# what chardet reports for UTF-8 with a BOM.  The mac and cp949 entries are
# chardet spellings the IANA step does not accept.
_ALIASES: dict[str, str | tuple[str, str]] = {
    "gb-18030": "gb18030",
    "gb_18030": "gb18030",
    "gb 18030": "gb18030",
    "macroman": "macintosh",
    "maccyrillic": "x-mac-cyrillic",
    "cp949": "windows-949",
    **{alias: ("UTF-32LE", "utf-32-le") for alias in _UTF32LE_ALIASES},
    **{alias: ("UTF-32BE", "utf-32-be") for alias in _UTF32BE_ALIASES},
    "utf-8-sig": ("UTF-8", "utf-8-sig"),
    "utf-16": ("UTF-16", "utf-16"),
    "utf16": ("UTF-16", "utf-16"),
    "utf-32": ("UTF-32", "utf-32"),
    "utf32": ("UTF-32", "utf-32"),
}

_HTML_LABELS: dict[str, str] = {
    label: name
    for name, (_, labels) in _HTML_ENCODINGS.items()
    for label in labels
}

# Pre-built reverse lookups keyed by the codec's own canonical name.
_IANA_NAMES: dict[str, str] = {
    codecs.lookup(codec).name: name for codec, name in _IANA_PREFERRED.items()
}

# Spellings the IANA step accepts for each codec: Python's canonical name,
# the registry key above and the IANA preferred name.  Looser spellings that
# codecs.lookup also understands ("utf 8", "latin 1") are rejected.
_IANA_SPELLINGS: dict[str, frozenset[str]] = {
    codecs.lookup(codec).name: frozenset(
        {codec, codecs.lookup(codec).name, name.lower()}
    )
    for codec, name in _IANA_PREFERRED.items()
}

_HTML_NAMES: dict[str, str] = {}
for _name, (_codec, _) in _HTML_ENCODINGS.items():
    _HTML_NAMES.setdefault(codecs.lookup(_codec).name, _name)


def normalize_label(label: str) -> str:
    """Trim surrounding whitespace and lowercase *label*."""
    return label.strip().lower()


# Keyed by registry entries only, so it holds at most one handle per entry.
@functools.cache
def _codec_encoding(name: str, codec: str, strip_bom: bool = False) -> Encoding:
    return Encoding(
        name=name,
        codec=codec,
        factory=functools.partial(CodecDecoder, codec, strip_bom=strip_bom),
    )


def _html_named(name: str) -> Encoding:
    codec, _ = _HTML_ENCODINGS[name]
    return _codec_encoding(name, codec, strip_bom=name in _HTML_STRIP_BOM)


def _html_encoding(label: str) -> Encoding | None:
    name = _HTML_LABELS.get(label)
    if name is None:
        return None
    return _html_named(name)


def _iana_encoding(label: str) -> Encoding | None:
    try:
        info = codecs.lookup(label)
    except (LookupError, ValueError):
        return None
    name = _IANA_NAMES.get(info.name)
    if name is None or label not in _IANA_SPELLINGS[info.name]:
        return None
    # "utf-16-be" decodes like the WHATWG "utf-16be" label.
    if name in _HTML_ENCODINGS:
        return _html_named(name)
    return _codec_encoding(name, info.name)


def _resolve(label: str) -> Encoding | None:
    alias = _ALIASES.get(label)
    if isinstance(alias, tuple):
        name, codec = alias
        return _codec_encoding(name, codec)
    if alias is not None:
        label = alias
    encoding = _html_encoding(label)
    if encoding is None:
        encoding = _iana_encoding(label)
    return encoding


def get_encoding_from_charset_name(name: str) -> Encoding:
    """Return the :class:`~toutf8.transform.Encoding` for charset *name*.

    Matching is case-insensitive and ignores surrounding whitespace.

    :raises ~toutf8.errors.InvalidNameError: If neither the alias table nor
        the HTML or IANA registries know *name*.
    """
    if not isinstance(name, str):
        raise InvalidNameError(name)
    encoding = _resolve(normalize_label(name))
    if encoding is None:
        logger.debug("no registry knows charset name %r", name)
        raise InvalidNameError(name)
    return encoding


def get_decoder_from_charset_name(name: str) -> Transformer:
    """Return a fresh decoder for charset *name*.

    :raises ~toutf8.errors.InvalidNameError: As
        :func:`get_encoding_from_charset_name`.
    """
    return get_encoding_from_charset_name(name).new_decoder()


def _codec_info(encoding: Encoding) -> codecs.CodecInfo:
    if encoding.codec is None:
        msg = f"unknown encoding: {encoding.name!r}"
        raise LookupError(msg)
    return codecs.lookup(encoding.codec)


def _iana_name(encoding: Encoding) -> str:
    info = _codec_info(encoding)
    try:
        return _IANA_NAMES[info.name]
    except KeyError:
        msg = f"ianaindex: {info.name} is not supported"
        raise LookupError(msg) from None


def _html_name(encoding: Encoding) -> str:
    info = _codec_info(encoding)
    try:
        return _HTML_NAMES[info.name]
    except KeyError:
        msg = f"htmlindex: {info.name} is not supported"
        raise LookupError(msg) from None


def get_charset_name_from_encoding(encoding: Encoding) -> str:
    """Report the canonical name of *encoding*.

    The IANA preferred name wins; the WHATWG name is the fallback.

    :raises ~toutf8.errors.UnsupportedEncodingError: If Python knows the
        codec but neither registry lists it.
    :raises ~toutf8.errors.UnknownEncodingError: If the codec is not known
        at all.
    """
    try:
        return _iana_name(encoding)
    except LookupError:
        pass
    try:
        return _html_name(encoding)
    except LookupError as e:
        if "not supported" in str(e):
            raise UnsupportedEncodingError(str(e)) from e
        raise UnknownEncodingError(str(e)) from e
