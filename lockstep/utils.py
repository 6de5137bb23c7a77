# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import string
from importlib import resources
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

JSONType = dict[str, "JSONType"] | list["JSONType"] | str | int | float | bool | None

ALPHANUMERIC = string.ascii_letters + string.digits
ALPHANUMERIC_HYPHEN = ALPHANUMERIC + "-"


def read_lines(path: str | Path | None = None, resource: str | None = None, skip_header: bool = True) -> Iterator[str]:
    """Yield the non-empty lines of a text file or of a packaged data resource.

    The first line is treated as a header and skipped unless `skip_header` is False.
    """
    if (path is None) == (resource is None):
        raise ValueError("Exactly one of path or resource must be given")

    if path is not None:
        source = Path(path)
    else:
        source = resources.files("lockstep.data").joinpath(resource)

    logger.debug(f"Reading lines from {source}")
    with source.open("r", encoding="utf-8") as f:
        if skip_header:
            next(f, None)
        for line in f:
            line = line.strip()
            if line:
                yield line
