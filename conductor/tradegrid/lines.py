# Trade Grid - Line Counter
# SPDX-License-Identifier: Apache-2.0

"""
Fast newline counting for raw ingest files.

Used to size progress reporting and pre-allocate buffers before a dump file
is parsed. The file is streamed in fixed-size chunks so memory use does not
depend on file size.
"""

from pathlib import Path
from typing import Union
import logging

logger = logging.getLogger(__name__)

# 128 KiB per read
READ_BUFFER_SIZE = 128 * 1024


def count_file_lines(
    path: Union[str, Path],
    chunk_size: int = READ_BUFFER_SIZE,
) -> int:
    """
    Count the number of '\\n' bytes in a file.

    Args:
        path: File to scan
        chunk_size: Bytes read per call (default: 128 KiB)

    Returns:
        Number of newline bytes in the file

    Raises:
        OSError: The file cannot be opened or read
        ValueError: chunk_size is not positive
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    count = 0
    chunks = 0
    with open(path, "rb") as fh:
        while True:
            chunk = fh.read(chunk_size)
            if not chunk:
                break
            count += chunk.count(b"\n")
            chunks += 1

    logger.debug(f"Counted {count} lines in {path} ({chunks} chunks)")
    return count
