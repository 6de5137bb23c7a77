# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
from typing import Any

from pydantic import Field, field_validator, model_validator

from lockstep.core.constraint import INVALID, Config, Constraint, Problem
from lockstep.core.module import ModuleRegistry


class MemberOfConfig(Config):
    values: frozenset[str] = Field(min_length=1)
    case_insensitive: bool = False


@ModuleRegistry.register
class MemberOf(Constraint[str]):
    """A literal set of allowed strings."""
    config_type = MemberOfConfig

    def __init__(self, config: MemberOfConfig | None = None, **options):
        super().__init__(config, **options)
        if self.config.case_insensitive:
            self._members = frozenset(value.lower() for value in self.config.values)
        else:
            self._members = self.config.values
        # Sorted so that seeded draws do not depend on set iteration order
        self._choices = sorted(self._members)

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if self.config.case_insensitive:
            value = value.lower()
        return value in self._members

    def generate(self, rng: random.Random) -> str:
        return rng.choice(self._choices)


class OneOfConfig(Config):
    branches: dict[str, Constraint]
    weights: dict[str, float] | None = None

    model_config = Config.model_config | {"arbitrary_types_allowed": True}

    @field_validator("branches")
    @classmethod
    def _check_branches(cls, branches):
        if not branches:
            raise ValueError("at least one branch is required")
        return branches

    @model_validator(mode="after")
    def _check_weights(self):
        if self.weights is not None:
            if set(self.weights) != set(self.branches):
                raise ValueError("weights must name exactly the branches")
            if any(weight < 0 for weight in self.weights.values()) or sum(self.weights.values()) <= 0:
                raise ValueError("weights must be non-negative and not all zero")
        return self


@ModuleRegistry.register
class OneOf(Constraint):
    """Tagged alternatives: a value is valid if any branch accepts it.

    Branches are tried in the order given; `conform` returns the tag of the
    first accepting branch alongside that branch's conformed value.
    """
    config_type = OneOfConfig

    def __init__(self, config: OneOfConfig | None = None, **options):
        super().__init__(config, **options)
        self._tags = list(self.config.branches)
        if self.config.weights is not None:
            self._weights = [self.config.weights[tag] for tag in self._tags]
        else:
            self._weights = None

    def __call__(self, value: Any) -> bool:
        return any(branch(value) for branch in self.config.branches.values())

    def generate(self, rng: random.Random) -> Any:
        if self._weights is None:
            tag = rng.choice(self._tags)
        else:
            tag = rng.choices(self._tags, weights=self._weights)[0]
        return self.config.branches[tag].generate(rng)

    def conform(self, value: Any) -> Any:
        for tag, branch in self.config.branches.items():
            conformed = branch.conform(value)
            if conformed is not INVALID:
                return (tag, conformed)
        return INVALID

    def unform(self, conformed: Any) -> Any:
        tag, value = conformed
        if tag not in self.config.branches:
            raise ValueError(f"Unknown branch {tag}")
        return self.config.branches[tag].unform(value)

    def explain(self, value: Any) -> list[Problem]:
        if self(value):
            return []
        return [
            Problem(value=problem.value, reason=problem.reason, path=(tag, *problem.path), index=problem.index)
            for tag, branch in self.config.branches.items()
            for problem in branch.explain(value)
        ]

    def describe(self) -> str:
        branches = ", ".join(f"{tag}={branch.describe()}" for tag, branch in self.config.branches.items())
        return f"OneOf({branches})"
