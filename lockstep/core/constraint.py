# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterator

from pydantic import BaseModel, ConfigDict, ValidationError

from lockstep.core.module import BaseModule

log = logging.getLogger(__name__)

DESCRIBE_MAX_ITEMS = 8


class ConfigurationError(ValueError):
    """Raised when a constraint is constructed from an invalid configuration."""


class ParseFailure(ValueError):
    """Raised by internal parsers when a candidate value has the wrong shape.

    Predicates always catch it and answer False.
    """


class _Invalid:
    def __repr__(self) -> str:
        return "INVALID"

    def __bool__(self) -> bool:
        return False


INVALID = _Invalid()


@dataclass(frozen=True)
class Problem:
    """A single reason why a value does not satisfy a constraint."""
    value: Any
    reason: str
    path: tuple = field(default=())
    index: tuple = field(default=())


class Config(BaseModel):
    """Base class for constraint configuration records."""
    model_config = ConfigDict(frozen=True, extra="forbid")


class Constraint[T](BaseModule, ABC):
    """
    Base class for constraints.

    A constraint pairs a predicate (calling the constraint) with a matched
    generator: every value produced by `generate` satisfies the predicate.
    Constraints are immutable once constructed and hold no other state, so
    they can be shared freely between threads.
    """
    config_type: ClassVar[type[Config]] = Config

    def __init__(self, config: Config | None = None, **options):
        if config is not None and options:
            raise ConfigurationError(f"{self.__class__.__name__} takes either a config or options, not both")

        if config is None:
            try:
                config = self.config_type(**options)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid {self.__class__.__name__} configuration: {e}") from e
        elif not isinstance(config, self.config_type):
            raise ConfigurationError(f"{self.__class__.__name__} expects a {self.config_type.__name__}, got {type(config).__name__}")

        self.config = config
        log.debug(f"Constructed {self.describe()}")

    @abstractmethod
    def __call__(self, value: Any) -> bool:
        """Check if the value satisfies the constraint."""
        pass

    @abstractmethod
    def generate(self, rng: random.Random) -> T:
        """Draw a single value that satisfies the constraint."""
        pass

    def generator(self, seed: int | None = None) -> Iterator[T]:
        """An infinite stream of conforming values.

        Every call starts an independent stream; equal seeds give equal streams.
        """
        rng = random.Random(seed)
        while True:
            yield self.generate(rng)

    def conform(self, value: Any) -> Any:
        return value if self(value) else INVALID

    def unform(self, conformed: Any) -> Any:
        return conformed

    def explain(self, value: Any) -> list[Problem]:
        if self(value):
            return []
        return [Problem(value=value, reason=f"does not satisfy {self.describe()}")]

    def describe(self) -> str:
        options = []
        for key, value in self.config.model_dump(exclude_none=True).items():
            if isinstance(value, frozenset):
                value = sorted(value)
                # Reference sets such as the TLD list are too long to print
                shown = repr(value) if len(value) <= DESCRIBE_MAX_ITEMS else f"<{len(value)} values>"
            else:
                shown = repr(value)
            options.append(f"{key}={shown}")
        return f"{self.__class__.__name__}({', '.join(options)})"

    def with_generator(self, generate: Callable[[random.Random], T]) -> "Constraint[T]":
        """Return a constraint with the same predicate but a different generator."""
        return GeneratorOverride(self, generate)

    def __repr__(self) -> str:
        return self.describe()


class GeneratorOverride[T](Constraint[T]):
    """Wraps a constraint and replaces its generator.

    The supplied generator is trusted; `check` can be used to verify it.
    """

    def __init__(self, inner: Constraint[T], generate: Callable[[random.Random], T]):
        self.inner = inner
        self._generate = generate
        super().__init__(inner.config)

    @property
    def config_type(self):
        return type(self.inner.config)

    def __call__(self, value: Any) -> bool:
        return self.inner(value)

    def generate(self, rng: random.Random) -> T:
        return self._generate(rng)

    def conform(self, value: Any) -> Any:
        return self.inner.conform(value)

    def unform(self, conformed: Any) -> Any:
        return self.inner.unform(conformed)

    def explain(self, value: Any) -> list[Problem]:
        return self.inner.explain(value)

    def describe(self) -> str:
        return self.inner.describe()
