# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterator

from lockstep.core.constraint import Constraint
from lockstep.utils import JSONType

log = logging.getLogger(__name__)


@dataclass
class Failure:
    """A generated value the predicate rejected, or a draw that raised."""
    value: Any
    error: str | None = None

    def to_json(self) -> JSONType:
        return {
            "value": repr(self.value),
            "error": self.error
        }


@dataclass
class CheckReport:
    """Result of checking a constraint's generator against its own predicate."""
    constraint: str
    seed: int | None
    num_samples: int = 0
    failures: list[Failure] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def passed(self) -> bool:
        return self.num_samples > 0 and not self.failures

    def to_json(self) -> JSONType:
        return {
            "constraint": self.constraint,
            "seed": self.seed,
            "num_samples": self.num_samples,
            "passed": self.passed,
            "failures": [failure.to_json() for failure in self.failures],
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None
        }


def iter_check(constraint: Constraint, num_samples: int = 100, seed: int | None = None,
               report: CheckReport | None = None) -> Iterator[Failure | None]:
    """Draw `num_samples` values and verify each one, yielding after every draw.

    Yields the failure for a rejected draw, or None when the draw conformed.
    """
    if num_samples <= 0:
        raise ValueError("num_samples must be positive")

    if report is None:
        report = CheckReport(constraint=constraint.describe(), seed=seed)

    rng = random.Random(seed)
    for _ in range(num_samples):
        failure = None
        try:
            value = constraint.generate(rng)
            if not constraint(value):
                failure = Failure(value=value)
        except Exception as e:
            # Any exception escaping a generator is itself a soundness failure
            failure = Failure(value=None, error=f"{type(e).__name__}: {e}")

        report.num_samples += 1
        if failure is not None:
            log.warning(f"{report.constraint} generated a non-conforming value: {failure.value!r} {failure.error or ''}")
            report.failures.append(failure)
        yield failure

    report.finished_at = datetime.now()


def check(constraint: Constraint, num_samples: int = 100, seed: int | None = None,
          callback: Callable[[Failure | None], None] | None = None) -> CheckReport:
    """Verify that every value the generator produces satisfies the predicate."""
    report = CheckReport(constraint=constraint.describe(), seed=seed)
    for result in iter_check(constraint, num_samples, seed, report):
        if callback is not None:
            callback(result)
    return report
