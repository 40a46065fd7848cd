# Trade Grid - Grid Key Encoder
# SPDX-License-Identifier: Apache-2.0

"""
Spatial grid keys for 3-D coordinates.

Maps a continuous (x, y, z) position into a single 64-bit bucket identifier
so that nearby points can be grouped for batch lookup and partitioning.

A bucket is 32 units wide. With current data every axis stays well within
+/- 8192 buckets, so each component fits a signed 16-bit compartment.

Key layout (bit 63 on the left):

    ┌──────────────────────┬──────────────┬──────────────┬──────────────┐
    │ 63..48  sign(qy)     │ 47..32  qy   │ 31..16  qx   │ 15..0  qz    │
    └──────────────────────┴──────────────┴──────────────┴──────────────┘

'y' takes the most-significant word because it has the least range (the
galaxy is disk-like) and because it represents galactic north/south. qy is
sign-extended to 64 bits before being shifted, so bits 48..63 are all ones
when qy is negative. qx and qz are zero-extended from their raw 16-bit
pattern.
"""

from dataclasses import dataclass
import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

# Width of a bucket in coordinate units
BUCKET_SIZE = 32

INT16_MIN = -0x8000
INT16_MAX = 0x7FFF
UINT16_MASK = 0xFFFF
UINT64_MASK = 0xFFFFFFFFFFFFFFFF


def _narrow_int16(value: int) -> int:
    """Reduce an integer to its 16-bit two's-complement value."""
    return ((value - INT16_MIN) & UINT16_MASK) + INT16_MIN


def quantize(component: float) -> int:
    """
    Quantize one coordinate component to its signed 16-bit bucket index.

    Computes floor(component / 32), so exact multiples of 32 belong to the
    bucket at or below them and negative values start at -1:

        quantize(31.9999) == 0, quantize(32.0) == 1, quantize(-0.001) == -1

    The caller must keep the bucket index within -32768..32767. Values
    outside that range wrap modulo 2**16.

    Raises:
        ValueError: component is NaN
        OverflowError: component is infinite
    """
    return _narrow_int16(math.floor(component / BUCKET_SIZE))


def sign_extend_16_to_64(value: int) -> int:
    """
    Widen a signed 16-bit value to 64 bits, replicating the sign bit.

    Returns the unsigned reinterpretation: -1 -> 0xFFFFFFFFFFFFFFFF.
    """
    return _narrow_int16(value) & UINT64_MASK


def zero_extend_16_to_64(value: int) -> int:
    """
    Widen the raw 16-bit pattern of a value to 64 bits with zero high bits.

    -1 -> 0x000000000000FFFF.
    """
    return value & UINT16_MASK


def _pack(qx: int, qy: int, qz: int) -> int:
    gy = sign_extend_16_to_64(qy)
    gx = zero_extend_16_to_64(qx)
    gz = zero_extend_16_to_64(qz)

    # Bits shifted past 63 are discarded, leaving the low 32 bits of gy on top
    return ((gy << 32) | (gx << 16) | gz) & UINT64_MASK


def encode(x: float, y: float, z: float) -> int:
    """
    Calculate the grid key for a coordinate.

    Args:
        x, y, z: Coordinate components (finite doubles)

    Returns:
        64-bit unsigned key as a Python int
    """
    return _pack(quantize(x), quantize(y), quantize(z))


# ============================================================================
# Vectorised variants
# Bit-identical to the scalar functions for every finite element.
# ============================================================================

def quantize_array(values) -> np.ndarray:
    """
    Quantize an array of coordinate components.

    Args:
        values: Array-like of doubles

    Returns:
        int16 array of bucket indices, same shape as the input
    """
    data = np.asarray(values, dtype=np.float64)

    finite = np.isfinite(data)
    if not finite.all():
        bad = int(data.size - np.count_nonzero(finite))
        raise ValueError(f"Cannot quantize {bad} non-finite coordinate value(s)")

    floored = np.floor(data / BUCKET_SIZE)
    # mod of an integral double is exact and non-negative, so this wraps like _narrow_int16
    wrapped = np.mod(floored, 65536.0)
    return wrapped.astype(np.uint16).astype(np.int16)


def encode_array(x, y, z) -> np.ndarray:
    """
    Calculate grid keys for arrays of coordinate components.

    Inputs are broadcast against each other.

    Returns:
        uint64 array of keys
    """
    qx, qy, qz = np.broadcast_arrays(
        quantize_array(x), quantize_array(y), quantize_array(z)
    )

    # sign-extend 16 -> 64
    gy = qy.astype(np.int64).astype(np.uint64)
    # zero-extend 16 -> 64
    gx = qx.astype(np.uint16).astype(np.uint64)
    gz = qz.astype(np.uint16).astype(np.uint64)

    keys = (gy << np.uint64(32)) | (gx << np.uint64(16)) | gz
    logger.debug(f"Encoded {keys.size} grid keys")
    return keys


def encode_points(points) -> np.ndarray:
    """Calculate grid keys for an (N, 3) array of x, y, z rows."""
    data = np.asarray(points, dtype=np.float64)
    if data.ndim != 2 or data.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) array of points, got shape {data.shape}")
    return encode_array(data[:, 0], data[:, 1], data[:, 2])


def bucket_counts(points) -> dict[int, int]:
    """
    Group points by grid key.

    Args:
        points: (N, 3) array-like of x, y, z rows

    Returns:
        Mapping of key -> number of points in that bucket, ordered by key
    """
    data = np.asarray(points, dtype=np.float64)
    if data.size == 0:
        return {}

    keys = encode_points(data)
    unique, counts = np.unique(keys, return_counts=True)
    logger.debug(f"Grouped {len(keys)} points into {len(unique)} buckets")
    return {int(k): int(c) for k, c in zip(unique, counts)}


@dataclass(frozen=True)
class GridCell:
    """
    A bucket in the spatial grid, identified by its quantized components.
    """

    qx: int
    qy: int
    qz: int

    def __post_init__(self):
        """Validate component ranges"""
        for name in ("qx", "qy", "qz"):
            value = getattr(self, name)
            if not INT16_MIN <= value <= INT16_MAX:
                raise ValueError(
                    f"Grid component {name}={value} outside signed 16-bit range"
                )

    @classmethod
    def from_coordinates(cls, x: float, y: float, z: float) -> "GridCell":
        """Create the cell containing a coordinate."""
        return cls(qx=quantize(x), qy=quantize(y), qz=quantize(z))

    @classmethod
    def from_key(cls, key: int) -> "GridCell":
        """
        Recover the cell components from a grid key.

        Raises:
            ValueError: key is not a 64-bit value produced by encode()
        """
        if not 0 <= key <= UINT64_MASK:
            raise ValueError(f"Grid key out of 64-bit range: {key}")

        qy = _narrow_int16(key >> 32)
        fill = key >> 48
        if fill != (UINT16_MASK if qy < 0 else 0):
            raise ValueError(f"Malformed grid key: {key:#018x}")

        return cls(
            qx=_narrow_int16(key >> 16),
            qy=qy,
            qz=_narrow_int16(key),
        )

    @property
    def key(self) -> int:
        """64-bit grid key for this cell"""
        return _pack(self.qx, self.qy, self.qz)

    @property
    def origin(self) -> tuple[float, float, float]:
        """Lowest corner of the bucket in coordinate units"""
        return (
            float(self.qx * BUCKET_SIZE),
            float(self.qy * BUCKET_SIZE),
            float(self.qz * BUCKET_SIZE),
        )
