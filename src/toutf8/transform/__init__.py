"""Byte transformers and the shared types around them.

A transformer consumes bytes of some source encoding and produces UTF-8.
It works on caller-provided slices so the same object can be pumped over
input of any size::

    result = decoder.transform(src, dst, at_eof)
    # result.n_src bytes of src consumed, result.n_dst bytes of dst written
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import field
from typing import NamedTuple, Protocol, runtime_checkable

from toutf8.enums import TransformStatus


class TransformResult(NamedTuple):
    """Byte counts and status returned by :meth:`Transformer.transform`."""

    n_src: int
    n_dst: int
    status: TransformStatus


@runtime_checkable
class Transformer(Protocol):
    """The decoder interface: bytes in some encoding in, UTF-8 out.

    Implementations must be deterministic and must not keep references to
    *src* or *dst* once :meth:`transform` returns.  A single instance is not
    safe to share between concurrent conversions.
    """

    def transform(
        self,
        src: bytes | bytearray | memoryview,
        dst: bytearray | memoryview,
        at_eof: bool = False,
    ) -> TransformResult:
        """Decode from *src* into *dst*.

        :param src: Input bytes.
        :param dst: Writable output slice.
        :param at_eof: ``True`` if no input follows *src*.
        :raises ~toutf8.errors.TransformError: On input that cannot be
            decoded.
        """
        ...

    def reset(self) -> None:
        """Drop any state carried over from earlier calls."""
        ...


class Nop:
    """The identity transformer: copies bytes through unchanged."""

    def transform(
        self,
        src: bytes | bytearray | memoryview,
        dst: bytearray | memoryview,
        at_eof: bool = False,
    ) -> TransformResult:
        n = min(len(src), len(dst))
        dst[:n] = src[:n]
        status = TransformStatus.OK if n == len(src) else TransformStatus.SHORT_DST
        return TransformResult(n, n, status)

    def reset(self) -> None:
        pass

    def __repr__(self) -> str:
        return "Nop()"


def is_nop(decoder: object) -> bool:
    """Return whether *decoder* is the identity transformer."""
    return isinstance(decoder, Nop)


@dataclasses.dataclass(frozen=True, slots=True)
class Encoding:
    """An immutable binding of a canonical charset name to a decoder factory.

    *codec* names the Python codec the decoder is built from (or mirrors),
    which is what the reverse name lookup works from.
    """

    name: str
    codec: str | None
    factory: Callable[[], Transformer] = field(repr=False, compare=False)

    def new_decoder(self) -> Transformer:
        """Return a fresh decoder for this encoding."""
        return self.factory()


#: Encoding handle whose decoder passes bytes through untouched.
NOP_ENCODING = Encoding(name="", codec=None, factory=Nop)
