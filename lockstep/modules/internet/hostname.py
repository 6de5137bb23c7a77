# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import random
import re
import string
from functools import lru_cache
from typing import Any

from pydantic import PositiveInt, field_validator, model_validator

from lockstep.core.constraint import Config, ConfigurationError, Constraint
from lockstep.core.module import ModuleRegistry
from lockstep.modules.internet.tlds import load_tlds
from lockstep.utils import ALPHANUMERIC

log = logging.getLogger(__name__)

HOSTPART_PATTERN = re.compile(r"\A(?:[A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9-]*[A-Za-z0-9])\Z")
MAX_HOSTPART_LENGTH = 64
MAX_HOSTNAME_LENGTH = 253
DEFAULT_MIN_DEPTH = 2
DEFAULT_MAX_DEPTH = 4

# Middle characters are drawn by class first, so hyphens are common
MIDDLE_CHAR_CLASSES = (string.digits, string.ascii_uppercase, string.ascii_lowercase, "-")


@ModuleRegistry.register
class HostPartConstraint(Constraint[str]):
    """A single RFC1123 hostname label: alphanumerics with interior hyphens."""

    def __call__(self, value: Any) -> bool:
        return (isinstance(value, str)
                and len(value) <= MAX_HOSTPART_LENGTH
                and HOSTPART_PATTERN.match(value) is not None)

    def generate(self, rng: random.Random, max_length: int = MAX_HOSTPART_LENGTH) -> str:
        length = rng.randint(1, min(max_length, MAX_HOSTPART_LENGTH))
        if length == 1:
            return rng.choice(ALPHANUMERIC)

        middle = [rng.choice(rng.choice(MIDDLE_CHAR_CLASSES)) for _ in range(length - 2)]
        return "".join([rng.choice(ALPHANUMERIC), *middle, rng.choice(ALPHANUMERIC)])


HOST_PART = HostPartConstraint()


def _is_hostname_shaped(value: str) -> bool:
    return (0 < len(value) <= MAX_HOSTNAME_LENGTH
            and all(HOST_PART(part) for part in value.split(".")))


class HostnameConfig(Config):
    """
    domains: the set of allowed domain suffixes, e.g. "com" or "co.uk"
    min_depth: the minimum number of labels
    max_depth: the maximum number of labels
    """
    domains: frozenset[str] | None = None
    min_depth: PositiveInt | None = None
    max_depth: PositiveInt | None = None

    @field_validator("domains")
    @classmethod
    def _normalize_domains(cls, domains):
        if not domains:
            return None
        domains = frozenset(domain.lower() for domain in domains)
        for domain in domains:
            if not _is_hostname_shaped(domain):
                raise ValueError(f"{domain!r} is not a valid domain suffix")
        return domains

    @model_validator(mode="after")
    def _check_depths(self):
        if self.min_depth is not None and self.max_depth is not None and self.max_depth < self.min_depth:
            raise ValueError(f"max_depth {self.max_depth} is less than min_depth {self.min_depth}")
        return self


@ModuleRegistry.register
class HostnameConstraint(Constraint[str]):
    """
    An Internet hostname that conforms to RFC1123: at most 253 characters of
    dot-separated labels, optionally restricted by depth and domain suffix.
    """
    config_type = HostnameConfig

    def __init__(self, config: HostnameConfig | None = None, **options):
        super().__init__(config, **options)
        min_depth, max_depth = self.config.min_depth, self.config.max_depth

        # Shortest hostname of depth n is n one-character labels plus n - 1 dots
        max_feasible_depth = (MAX_HOSTNAME_LENGTH + 1) // 2
        if min_depth is not None and min_depth > max_feasible_depth:
            raise ConfigurationError(f"min_depth {min_depth} cannot fit in {MAX_HOSTNAME_LENGTH} characters")

        low = min_depth or min(DEFAULT_MIN_DEPTH, max_depth or DEFAULT_MIN_DEPTH)
        high = max_depth or max(DEFAULT_MAX_DEPTH, low)
        self._depths = (low, min(high, max_feasible_depth))

        self._suffixes = None
        self._plans = None
        if self.config.domains:
            self._suffixes = tuple(sorted("." + domain for domain in self.config.domains))
            self._plans = self._plan_domains(low, high)
            if not self._plans:
                raise ConfigurationError(f"No domain in {sorted(self.config.domains)} fits the depth bounds")

    def _plan_domains(self, low: int, high: int) -> list[tuple[str, int, int]]:
        """Work out how many extra labels each domain suffix needs."""
        plans = []
        for domain in sorted(self.config.domains):
            depth = domain.count(".") + 1
            domain_high = high if self.config.max_depth else max(high, depth + 1)
            min_extra = max(1, low - depth)
            # Each extra label costs at least one character and one dot
            max_extra = min(domain_high - depth, (MAX_HOSTNAME_LENGTH - len(domain)) // 2)
            if max_extra < min_extra:
                log.debug(f"Dropping domain {domain} from generation, it does not fit depths {low}..{high}")
                continue
            plans.append((domain, min_extra, max_extra))
        return plans

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, str) or len(value) > MAX_HOSTNAME_LENGTH:
            return False
        if value.startswith(".") or value.endswith("."):
            return False

        parts = value.split(".")
        if self.config.max_depth is not None and len(parts) > self.config.max_depth:
            return False
        if self.config.min_depth is not None and len(parts) < self.config.min_depth:
            return False
        if not all(HOST_PART(part) for part in parts):
            return False
        if self._suffixes and not value.lower().endswith(self._suffixes):
            return False
        return True

    def _labels(self, rng: random.Random, count: int, budget: int) -> list[str]:
        """Generate `count` labels whose lengths add up to at most `budget`."""
        labels = []
        for i in range(count):
            reserved = count - i - 1
            label = HOST_PART.generate(rng, max_length=budget - reserved)
            budget -= len(label)
            labels.append(label)
        return labels

    def generate(self, rng: random.Random) -> str:
        if self._plans:
            domain, min_extra, max_extra = rng.choice(self._plans)
            count = rng.randint(min_extra, max_extra)
            labels = self._labels(rng, count, MAX_HOSTNAME_LENGTH - len(domain) - count)
            return ".".join([*labels, domain])

        count = rng.randint(*self._depths)
        return ".".join(self._labels(rng, count, MAX_HOSTNAME_LENGTH - (count - 1)))


def hostname(**options) -> HostnameConstraint:
    """Returns a constraint for an RFC1123 hostname. See `HostnameConfig` for the options."""
    return HostnameConstraint(**options)


@lru_cache(maxsize=None)
def fully_qualified_hostname() -> HostnameConstraint:
    """A hostname under any IANA top-level domain, with at least two labels."""
    return HostnameConstraint(domains=load_tlds(), min_depth=2)
