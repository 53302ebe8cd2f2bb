"""Port for the player's string decryption primitive."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DecryptorPort(Protocol):
    """Decodes obfuscated player strings.

    Implementations must be pure and deterministic: the same ciphertext and
    key always produce the same plaintext.
    """

    async def decrypt(self, ciphertext: str, key: str) -> str | None:
        """Decode *ciphertext* with *key*.

        Returns None (or raises) when the payload cannot be decoded; callers
        treat both as a dropped record.
        """
        ...
