"""
Seeded shuffling for the wall.

A 96-byte seed from `secrets` is hashed with SHA512, together with the round
number, into the state of a PCG64DXSM generator. The deck is then permuted
with Fisher-Yates, drawing each index by rejection sampling so no permutation
is favored.

A seed plus a round counter fully determines the wall, which makes any round
replayable from its seed and action log.

Reference: O'Neill, M. (2014). "PCG: A Family of Simple Fast Space-Efficient
Statistically Good Algorithms for Random Number Generation."
"""

from __future__ import annotations

import hashlib
import secrets
from typing import TypeVar

SEED_BYTES = 96  # 768 bits
_DOMAIN_PREFIX = b"dojo-wall-v1:"

# PCG64DXSM constants
_PCG_MULTIPLIER = 0x2360ED051FC65DA44385DF649FCCF645
_PCG_DXSM_MUL = 0xDA942042E4DD58B5
_UINT128_MASK = (1 << 128) - 1
_UINT64_MASK = (1 << 64) - 1

T = TypeVar("T")


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is the correct hex format.

    Enforces exact length (192 hex chars = 96 bytes) and valid hex characters.
    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    expected_length = SEED_BYTES * 2
    if len(seed_hex) != expected_length:
        raise ValueError(f"Seed must be exactly {expected_length} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


class PCG64DXSM:
    """
    Pure Python PCG64DXSM (Permuted Congruential Generator).

    128-bit LCG state with the DXSM (double-xorshift-multiply) output
    permutation producing 64-bit values.
    """

    def __init__(self, state: int, increment: int) -> None:
        self._inc = ((increment << 1) | 1) & _UINT128_MASK  # increment must be odd
        self._state = (state + self._inc) & _UINT128_MASK
        self._state = (self._state * _PCG_MULTIPLIER + self._inc) & _UINT128_MASK
        self._state = (self._state * _PCG_MULTIPLIER + self._inc) & _UINT128_MASK

    def next_uint64(self) -> int:
        """Generate the next 64-bit unsigned integer and advance state."""
        state = self._state
        hi = (state >> 64) & _UINT64_MASK
        lo = (state & _UINT64_MASK) | 1

        hi ^= hi >> 32
        hi = (hi * _PCG_DXSM_MUL) & _UINT64_MASK
        hi ^= hi >> 48
        hi = (hi * lo) & _UINT64_MASK

        self._state = (state * _PCG_MULTIPLIER + self._inc) & _UINT128_MASK
        return hi


def generate_seed() -> str:
    """Generate a cryptographic seed as a hex string (192 chars)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def derive_round_pcg(seed_hex: str, round_number: int) -> PCG64DXSM:
    """
    Derive a per-round PCG64DXSM from the table seed.

    SHA512(_DOMAIN_PREFIX + seed_bytes + round_number_bytes) produces 64 bytes;
    the first 16 become the PCG state and the next 16 the increment.
    """
    if not (0 <= round_number < 2**32):
        raise ValueError("round_number must be in [0, 2^32)")
    validate_seed_hex(seed_hex)
    data = bytes.fromhex(seed_hex) + round_number.to_bytes(4, byteorder="little")
    derived = hashlib.sha512(_DOMAIN_PREFIX + data).digest()
    state = int.from_bytes(derived[:16], byteorder="little")
    increment = int.from_bytes(derived[16:32], byteorder="little")
    return PCG64DXSM(state, increment)


def bounded_uint64(pcg: PCG64DXSM, bound: int) -> int:
    """
    Generate an unbiased random integer in [0, bound) via rejection sampling.

    Values from the partial final bucket are rejected, which removes modulo bias.
    """
    if bound <= 0 or bound > (1 << 64):
        raise ValueError("bound must be in (0, 2^64]")
    limit = (1 << 64) - ((1 << 64) % bound)
    while True:
        r = pcg.next_uint64()
        if r < limit:
            return r % bound


def fisher_yates_shuffle(items: list[T], pcg: PCG64DXSM) -> list[T]:
    """
    Return a shuffled copy of items (Fisher-Yates / Knuth).

    For i in 0..n-2: swap items[i] with items[i + bounded_uint64(n - i)].
    The input list is left untouched.
    """
    n = len(items)
    result = list(items)
    for i in range(n - 1):
        j = i + bounded_uint64(pcg, n - i)
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_tiles(tiles: list[T], seed_hex: str | None = None, round_number: int = 0) -> list[T]:
    """
    Shuffle tiles uniformly.

    When seed_hex is None a fresh cryptographic seed is used, so the result
    is not reproducible.
    """
    pcg = derive_round_pcg(seed_hex if seed_hex is not None else generate_seed(), round_number)
    return fisher_yates_shuffle(tiles, pcg)
