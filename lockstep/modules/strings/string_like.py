# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
from typing import Any, Callable

from lockstep.core.constraint import INVALID, Config, Constraint, Problem
from lockstep.core.module import ModuleRegistry
from lockstep.modules.strings.charseq import CharSeqConstraint


class StringLikeConfig(Config):
    inner: Constraint

    model_config = Config.model_config | {"arbitrary_types_allowed": True}


@ModuleRegistry.register
class StringLike(Constraint[str]):
    """
    Lifts a constraint over character sequences to a constraint over strings.

    Strings are checked as lists of characters and generated sequences are
    joined back into strings, so `unform(conform(s)) == s` for every accepted s.
    """
    config_type = StringLikeConfig

    @property
    def inner(self) -> Constraint:
        return self.config.inner

    def __call__(self, value: Any) -> bool:
        return isinstance(value, str) and self.inner(list(value))

    def conform(self, value: Any) -> Any:
        if not isinstance(value, str):
            return INVALID
        return self.inner.conform(list(value))

    def unform(self, conformed: Any) -> str:
        chars = self.inner.unform(conformed)
        if not isinstance(chars, (list, tuple)) or not all(isinstance(char, str) and len(char) == 1 for char in chars):
            raise NotImplementedError(
                f"Cannot rebuild a string from {self.inner.describe()} conformed value {conformed!r}"
            )
        return "".join(chars)

    def explain(self, value: Any) -> list[Problem]:
        if not isinstance(value, str):
            return [Problem(value=value, reason="is not a string")]
        return self.inner.explain(list(value))

    def generate(self, rng: random.Random) -> str:
        return "".join(self.inner.generate(rng))

    def with_generator(self, generate: Callable[[random.Random], str]) -> Constraint[str]:
        raise NotImplementedError("StringLike does not support replacing its generator yet")

    def describe(self) -> str:
        return f"StringLike({self.inner.describe()})"


def string_like(constraint: Constraint | str) -> StringLike:
    """Lift a character sequence constraint, or the name of one, to strings."""
    if isinstance(constraint, str):
        constraint = ModuleRegistry.get(constraint)
    return StringLike(inner=constraint)


def string_in(**options) -> StringLike:
    """A string whose characters satisfy `CharSeqConstraint(**options)`."""
    return StringLike(inner=CharSeqConstraint(**options))
