"""Player string decoder.

The player script picks one of several string-decoding functions at runtime
and exposes it under an obfuscated ``window`` name. ``SchemeDecryptor`` keeps
a registry from that name to a pure Python port of the function. Unknown
names decode to None so the affected record is dropped.

Registered schemes:
    LXVUMCoAHJ, GuxKGDsA2T, laM1dAi3vO   reversed url-safe base64, char shift
    bMGyx71TzQLfdonN                      3-char chunks in reverse order
    Iry9MQXnLs                            hex -> XOR -> shift -> base64
    IGLImMhWrI                            reverse, rot13, reverse, base64
    GTAxQyTyBx                            reverse, every other char, base64
    C66jPHx8qu                            reverse, hex -> XOR
    MyL1IRSfHe                            reverse, shift -1, hex
    detdj7JHiK                            trim, base64 -> XOR
    nZlUnj2VSo                            caesar letter shift
"""

from __future__ import annotations

import base64
import binascii
import codecs
from collections.abc import Callable

import structlog

log = structlog.get_logger(__name__)

Scheme = Callable[[str], str]


def _b64decode(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    return base64.b64decode(padded, validate=False).decode("utf-8")


def _shift(data: str, offset: int) -> str:
    return "".join(chr(ord(ch) + offset) for ch in data)


def _xor(data: str, key: str) -> str:
    return "".join(chr(ord(ch) ^ ord(key[i % len(key)])) for i, ch in enumerate(data))


def _reversed_b64_shift(offset: int) -> Scheme:
    def _decode(data: str) -> str:
        urlsafe = data[::-1].replace("-", "+").replace("_", "/")
        return _shift(_b64decode(urlsafe), -offset)

    return _decode


def _chunk_reverse(data: str) -> str:
    chunks = [data[i : i + 3] for i in range(0, len(data), 3)]
    return "".join(reversed(chunks))


_IRY_KEY = "pWB9V)[*4I`nJpp?ozyB~dbr9yt!_n4u"


def _hex_xor_shift_b64(data: str) -> str:
    raw = bytes.fromhex(data).decode("utf-8")
    return _b64decode(_shift(_xor(raw, _IRY_KEY), -3))


def _rot13_b64(data: str) -> str:
    return _b64decode(codecs.decode(data[::-1], "rot13")[::-1])


def _every_other_b64(data: str) -> str:
    return _b64decode(data[::-1][::2])


_C66_KEY = "X9a(O;FMV2-7VO5x;Ao\x05:dN1NoFs?j,"


def _reversed_hex_xor(data: str) -> str:
    return _xor(bytes.fromhex(data[::-1]).decode("utf-8"), _C66_KEY)


def _reversed_shift_hex(data: str) -> str:
    return bytes.fromhex(_shift(data[::-1], -1)).decode("utf-8")


_DET_KEY = '3SAY~#%Y(V%>5d/Yg"$G[Lh1rK4a;7ok'


def _trimmed_b64_xor(data: str) -> str:
    return _xor(_b64decode(data[10:-16]), _DET_KEY)


def _caesar(data: str, offset: int = 3) -> str:
    out = []
    for ch in data:
        if "a" <= ch <= "z":
            out.append(chr((ord(ch) - ord("a") - offset) % 26 + ord("a")))
        elif "A" <= ch <= "Z":
            out.append(chr((ord(ch) - ord("A") - offset) % 26 + ord("A")))
        else:
            out.append(ch)
    return "".join(out)


DEFAULT_SCHEMES: dict[str, Scheme] = {
    "LXVUMCoAHJ": _reversed_b64_shift(3),
    "GuxKGDsA2T": _reversed_b64_shift(7),
    "laM1dAi3vO": _reversed_b64_shift(5),
    "bMGyx71TzQLfdonN": _chunk_reverse,
    "Iry9MQXnLs": _hex_xor_shift_b64,
    "IGLImMhWrI": _rot13_b64,
    "GTAxQyTyBx": _every_other_b64,
    "C66jPHx8qu": _reversed_hex_xor,
    "MyL1IRSfHe": _reversed_shift_hex,
    "detdj7JHiK": _trimmed_b64_xor,
    "nZlUnj2VSo": _caesar,
}


class SchemeDecryptor:
    """Decrypts player strings by dispatching on the key name.

    Satisfies :class:`~embedscout.domain.ports.DecryptorPort`.
    """

    def __init__(self, schemes: dict[str, Scheme] | None = None) -> None:
        self._schemes: dict[str, Scheme] = dict(
            DEFAULT_SCHEMES if schemes is None else schemes
        )

    def register(self, key: str, scheme: Scheme) -> None:
        self._schemes[key] = scheme

    def known_keys(self) -> list[str]:
        return sorted(self._schemes)

    async def decrypt(self, ciphertext: str, key: str) -> str | None:
        scheme = self._schemes.get(key.strip())
        if scheme is None:
            log.warning("decrypt_unknown_key", key=key)
            return None
        try:
            plaintext = scheme(ciphertext.strip())
        except (ValueError, UnicodeError, binascii.Error) as exc:
            log.warning("decrypt_failed", key=key, error=str(exc))
            return None
        return plaintext or None
