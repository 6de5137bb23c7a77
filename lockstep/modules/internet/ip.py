# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
import re
from typing import Any

from lockstep.core.constraint import Constraint
from lockstep.core.module import ModuleRegistry

OCTET = re.compile(r"[0-9]{1,3}")


@ModuleRegistry.register
class IpAddressConstraint(Constraint[str]):
    """A dotted-quad IPv4 address."""

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        parts = value.split(".")
        return len(parts) == 4 and all(OCTET.fullmatch(part) and int(part) <= 255 for part in parts)

    def generate(self, rng: random.Random) -> str:
        return ".".join(str(rng.randint(0, 255)) for _ in range(4))
