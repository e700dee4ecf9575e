"""Tests for the chunked transcoding loop and the to_utf8_* entry points."""

from __future__ import annotations

import pytest

from toutf8 import transcoder
from toutf8.enums import TransformStatus
from toutf8.errors import InvalidNameError, TransformError, WrongDecoderError
from toutf8.registry import get_encoding_from_charset_name
from toutf8.transcoder import (
    to_utf8_with_charset_name,
    to_utf8_with_decoder,
    to_utf8_with_encoding,
    transcode,
)
from toutf8.transform import Nop, TransformResult
from toutf8.transform.codec import CodecDecoder

_CHINESE = "中文编码转换测试，包含标点符号。" * 500


class PairDecoder:
    """Toy decoder: every byte pair is a big-endian ASCII code unit."""

    def __init__(self) -> None:
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1

    def transform(self, src, dst, at_eof=False):
        n_src = n_dst = 0
        while n_src + 2 <= len(src):
            if n_dst >= len(dst):
                return TransformResult(n_src, n_dst, TransformStatus.SHORT_DST)
            dst[n_dst] = src[n_src + 1]
            n_src += 2
            n_dst += 1
        if n_src < len(src):
            return TransformResult(n_src, n_dst, TransformStatus.SHORT_SRC)
        return TransformResult(n_src, n_dst, TransformStatus.OK)


class StuckDecoder:
    def reset(self) -> None:
        pass

    def transform(self, src, dst, at_eof=False):
        return TransformResult(0, 0, TransformStatus.OK)

    def __repr__(self) -> str:
        return "StuckDecoder()"


def test_transcode_large_input_across_chunks():
    data = _CHINESE.encode("gb18030")
    assert len(data) > 3 * transcoder.CHUNK_SIZE
    assert transcode(data, CodecDecoder("gb18030")) == _CHINESE.encode()


def test_transcode_sequence_split_at_chunk_boundary():
    # One ASCII byte up front puts every two-byte sequence across the
    # chunk boundary.
    data = b"x" + _CHINESE.encode("gbk")
    assert transcode(data, CodecDecoder("gbk")) == b"x" + _CHINESE.encode()


def test_transcode_grows_destination(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(transcoder, "INITIAL_DST_SIZE", 1)
    data = _CHINESE.encode("gb18030")
    assert transcode(data, CodecDecoder("gb18030")) == _CHINESE.encode()


def test_transcode_short_src_reoffers_tail(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(transcoder, "CHUNK_SIZE", 3)
    monkeypatch.setattr(transcoder, "INITIAL_DST_SIZE", 2)
    decoder = PairDecoder()
    assert transcode(b"\x00h\x00e\x00l\x00l\x00o", decoder) == b"hello"
    assert decoder.resets == 1


def test_transcode_short_src_at_eof_fails():
    with pytest.raises(TransformError, match="multi-byte"):
        transcode(b"\x00h\x00", PairDecoder())


def test_transcode_detects_stalled_decoder():
    with pytest.raises(TransformError, match="no progress"):
        transcode(b"abc", StuckDecoder())


def test_transcode_empty_input():
    assert transcode(b"", CodecDecoder("gbk")) == b""


def test_decoder_is_reset_before_use():
    decoder = CodecDecoder("gb18030")
    decoder.transform(b"\xc4", bytearray(8), False)
    assert transcode(b"A", decoder) == b"A"


def test_nop_returns_content_unchanged():
    data = b"\xff\xfe not really text"
    assert to_utf8_with_decoder(data, Nop()) is data


def test_nop_copies_bytearray():
    data = bytearray(b"abc")
    result = to_utf8_with_decoder(data, Nop())
    assert result == b"abc"
    assert isinstance(result, bytes)


def test_wrong_decoder_error_carries_content():
    data = b"ok \xff\xfe"
    with pytest.raises(WrongDecoderError) as exc_info:
        to_utf8_with_decoder(data, CodecDecoder("utf-8", errors="strict"))
    assert exc_info.value.content == data
    assert isinstance(exc_info.value.__cause__, TransformError)


def test_rejects_non_bytes():
    with pytest.raises(TypeError):
        to_utf8_with_decoder("text", Nop())  # type: ignore[arg-type]


def test_to_utf8_with_encoding():
    encoding = get_encoding_from_charset_name("big5")
    assert to_utf8_with_encoding("中文測試".encode("big5"), encoding) == "中文測試".encode()


def test_to_utf8_with_charset_name_gb18030_alias():
    data = bytes([0xC4, 0xE3, 0xBA, 0xC3])
    assert to_utf8_with_charset_name(data, "gb-18030") == bytes.fromhex("E4BDA0E5A5BD")


def test_to_utf8_with_charset_name_shift_jis():
    text = "これはテストです。"
    assert to_utf8_with_charset_name(text.encode("shift_jis"), "sjis") == text.encode()


def test_to_utf8_with_unknown_charset_name():
    with pytest.raises(InvalidNameError):
        to_utf8_with_charset_name(b"abc", "x-unknown")


def test_malformed_input_is_replaced():
    assert to_utf8_with_charset_name(b"\xc4", "gbk") == b"\xef\xbf\xbd"
