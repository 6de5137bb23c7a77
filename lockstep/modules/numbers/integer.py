# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
from typing import Any

from pydantic import model_validator

from lockstep.core.constraint import Config, Constraint
from lockstep.core.module import ModuleRegistry


class IntRangeConfig(Config):
    min: int
    max: int

    @model_validator(mode="after")
    def _check_range(self):
        if self.max <= self.min:
            raise ValueError(f"empty range [{self.min}, {self.max})")
        return self


@ModuleRegistry.register
class IntRangeConstraint(Constraint[int]):
    """Integers in the half-open range [min, max)."""
    config_type = IntRangeConfig

    def __call__(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return self.config.min <= value < self.config.max

    def generate(self, rng: random.Random) -> int:
        return rng.randrange(self.config.min, self.config.max)


def int_in(min: int, max: int) -> IntRangeConstraint:
    return IntRangeConstraint(min=min, max=max)
