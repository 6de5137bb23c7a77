# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
import string
from itertools import groupby
from typing import Any

from pydantic import NonNegativeInt, field_validator, model_validator

from lockstep.core.constraint import INVALID, Config, Constraint, Problem
from lockstep.core.module import ModuleRegistry
from lockstep.modules.internet.hostname import HOST_PART, MAX_HOSTPART_LENGTH
from lockstep.utils import ALPHANUMERIC, ALPHANUMERIC_HYPHEN

DEFAULT_CHARS = string.ascii_letters + string.digits + string.punctuation + " "
# Extra length allowed above min_count when no max_count is configured
DEFAULT_LENGTH_SPREAD = 32


class CharSeqConfig(Config):
    """
    count: the exact length
    min_count, max_count: inclusive length bounds, not combined with count
    chars: the allowed characters, default any
    """
    count: NonNegativeInt | None = None
    min_count: NonNegativeInt | None = None
    max_count: NonNegativeInt | None = None
    chars: frozenset[str] | None = None

    @field_validator("chars", mode="before")
    @classmethod
    def _split_chars(cls, chars):
        if isinstance(chars, str):
            return frozenset(chars)
        return chars

    @field_validator("chars")
    @classmethod
    def _check_chars(cls, chars):
        if chars is not None and any(len(char) != 1 for char in chars):
            raise ValueError("chars must be single characters")
        return chars

    @model_validator(mode="after")
    def _check_counts(self):
        if self.count is not None and (self.min_count is not None or self.max_count is not None):
            raise ValueError("count cannot be combined with min_count or max_count")
        if self.min_count is not None and self.max_count is not None and self.max_count < self.min_count:
            raise ValueError(f"max_count {self.max_count} is less than min_count {self.min_count}")
        if self.chars is not None and not self.chars and (self.count or self.min_count):
            raise ValueError("no characters are allowed but a non-empty sequence is required")
        return self


@ModuleRegistry.register
class CharSeqConstraint(Constraint[list[str]]):
    """A list or tuple of single characters with bounded length."""
    config_type = CharSeqConfig

    def __init__(self, config: CharSeqConfig | None = None, **options):
        super().__init__(config, **options)
        self._pool = sorted(self.config.chars) if self.config.chars is not None else list(DEFAULT_CHARS)

    def _length_ok(self, length: int) -> bool:
        config = self.config
        if config.count is not None:
            return length == config.count
        return ((config.min_count is None or length >= config.min_count)
                and (config.max_count is None or length <= config.max_count))

    def _char_ok(self, char: Any) -> bool:
        return (isinstance(char, str) and len(char) == 1
                and (self.config.chars is None or char in self.config.chars))

    def __call__(self, value: Any) -> bool:
        return (isinstance(value, (list, tuple))
                and self._length_ok(len(value))
                and all(self._char_ok(char) for char in value))

    def explain(self, value: Any) -> list[Problem]:
        if not isinstance(value, (list, tuple)):
            return [Problem(value=value, reason="is not a sequence of characters")]

        problems = []
        if not self._length_ok(len(value)):
            problems.append(Problem(value=value, reason=f"has length {len(value)}, outside {self.describe()}"))
        for i, char in enumerate(value):
            if not self._char_ok(char):
                problems.append(Problem(value=char, reason="is not an allowed character", index=(i,)))
        return problems

    def conform(self, value: Any) -> Any:
        return list(value) if self(value) else INVALID

    def unform(self, conformed: Any) -> Any:
        return list(conformed)

    def generate(self, rng: random.Random) -> list[str]:
        config = self.config
        if config.count is not None:
            length = config.count
        else:
            low = config.min_count or 0
            high = config.max_count if config.max_count is not None else low + DEFAULT_LENGTH_SPREAD
            length = rng.randint(low, high)

        if not self._pool:
            return []
        return [rng.choice(self._pool) for _ in range(length)]


def charseq_in(**options) -> CharSeqConstraint:
    """Returns a constraint for a character sequence. See `CharSeqConfig` for the options."""
    return CharSeqConstraint(**options)


@ModuleRegistry.register
class LabelCharSeqConstraint(CharSeqConstraint):
    """
    A hostname label as a character sequence: runs of alphanumerics separated
    by runs of hyphens, 1 to 64 characters.

    Conforms to {"prefix": [...], "sections": [{"hyphen": [...], "suffix": [...]}, ...]}.
    """

    def __init__(self, config: CharSeqConfig | None = None):
        if config is None:
            config = CharSeqConfig(chars=ALPHANUMERIC_HYPHEN, min_count=1, max_count=MAX_HOSTPART_LENGTH)
        super().__init__(config)

    def _runs(self, value) -> list[tuple[bool, list[str]]]:
        return [(is_hyphen, list(run)) for is_hyphen, run in groupby(value, key=lambda char: char == "-")]

    def __call__(self, value: Any) -> bool:
        if not super().__call__(value):
            return False
        return value[0] in ALPHANUMERIC and value[-1] in ALPHANUMERIC

    def explain(self, value: Any) -> list[Problem]:
        problems = super().explain(value)
        if not problems and not self(value):
            problems.append(Problem(value=value, reason="must start and end with a letter or digit"))
        return problems

    def conform(self, value: Any) -> Any:
        if not self(value):
            return INVALID

        runs = self._runs(value)
        _, prefix = runs[0]
        sections = [
            {"hyphen": hyphen, "suffix": suffix}
            for (_, hyphen), (_, suffix) in zip(runs[1::2], runs[2::2])
        ]
        return {"prefix": prefix, "sections": sections}

    def unform(self, conformed: Any) -> Any:
        chars = list(conformed["prefix"])
        for section in conformed["sections"]:
            chars.extend(section["hyphen"])
            chars.extend(section["suffix"])
        return chars

    def generate(self, rng: random.Random) -> list[str]:
        return list(HOST_PART.generate(rng))

    def describe(self) -> str:
        return "LabelCharSeqConstraint()"
