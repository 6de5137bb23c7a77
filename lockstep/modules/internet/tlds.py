# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from functools import lru_cache
from pathlib import Path

from lockstep.utils import read_lines

log = logging.getLogger(__name__)

TLD_RESOURCE = "tlds-alpha-by-domain.txt"


@lru_cache(maxsize=None)
def load_tlds(path: str | Path | None = None) -> frozenset[str]:
    """The set of top-level domains assigned by the IANA.

    Reads the IANA list format: a version header line followed by one
    domain per line. Entries are lower-cased. Defaults to the packaged copy
    of http://data.iana.org/TLD/tlds-alpha-by-domain.txt. Loaded once per
    path and never mutated.
    """
    if path is None:
        lines = read_lines(resource=TLD_RESOURCE)
    else:
        lines = read_lines(path=path)

    tlds = frozenset(line.lower() for line in lines)
    log.info(f"Loaded {len(tlds)} top-level domains from {path or TLD_RESOURCE}")
    return tlds
