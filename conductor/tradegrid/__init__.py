# Trade Grid - Telemetry Ingest
# SPDX-License-Identifier: Apache-2.0

"""
Reduces raw telemetry to compact representations for downstream consumers.

Core operations:
1. Grid Keys: Pack a 3-D coordinate's 32-unit bucket into a 64-bit key
2. Supply Readings: Decode "<units><level>" tokens into numeric pairs
3. Line Counting: Count newline bytes in raw dump files
"""

__version__ = "0.1.0"

from tradegrid.gridkey import (
    BUCKET_SIZE,
    GridCell,
    bucket_counts,
    encode,
    encode_array,
    encode_points,
    quantize,
    quantize_array,
    sign_extend_16_to_64,
    zero_extend_16_to_64,
)
from tradegrid.lines import READ_BUFFER_SIZE, count_file_lines
from tradegrid.supply import (
    SupplyError,
    SupplyLevel,
    SupplyReadingError,
    parse_supply_level,
    try_parse_supply_level,
)

__all__ = [
    "BUCKET_SIZE",
    "GridCell",
    "bucket_counts",
    "encode",
    "encode_array",
    "encode_points",
    "quantize",
    "quantize_array",
    "sign_extend_16_to_64",
    "zero_extend_16_to_64",
    "READ_BUFFER_SIZE",
    "count_file_lines",
    "SupplyError",
    "SupplyLevel",
    "SupplyReadingError",
    "parse_supply_level",
    "try_parse_supply_level",
]
