# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
import string
from typing import Any

from pydantic import field_validator, model_validator

from lockstep.core.constraint import Config, Constraint
from lockstep.core.module import ModuleRegistry
from lockstep.modules.internet.hostname import HostnameConstraint

LOCAL_CHARS = string.ascii_letters + string.digits + "!#$%&'*+-/=?^_`{|}~"
LOCAL_DOT_CHARS = LOCAL_CHARS + "."
MAX_LOCAL_LENGTH = 64


@ModuleRegistry.register
class LocalEmailPartConstraint(Constraint[str]):
    """The part of an email address before the @.

    A dot-atom: 1 to 64 characters from the RFC 5322 atext set plus dots,
    with no leading, trailing or doubled dot.
    """
    _allowed = frozenset(LOCAL_DOT_CHARS)

    def __call__(self, value: Any) -> bool:
        return (isinstance(value, str)
                and 1 <= len(value) <= MAX_LOCAL_LENGTH
                and not value.startswith(".")
                and not value.endswith(".")
                and ".." not in value
                and all(char in self._allowed for char in value))

    def generate(self, rng: random.Random) -> str:
        length = rng.randint(1, MAX_LOCAL_LENGTH)
        chars = []
        for i in range(length):
            # A dot may only follow a non-dot and may not come last
            if i == 0 or i == length - 1 or chars[-1] == ".":
                chars.append(rng.choice(LOCAL_CHARS))
            else:
                chars.append(rng.choice(LOCAL_DOT_CHARS))
        return "".join(chars)


LOCAL_EMAIL_PART = LocalEmailPartConstraint()


class EmailConfig(Config):
    """
    hosts: a literal set of allowed hosts, matched case-insensitively
    domains: the set of allowed domain suffixes for the host

    At most one of the two may be given.
    """
    hosts: frozenset[str] | None = None
    domains: frozenset[str] | None = None

    @field_validator("hosts")
    @classmethod
    def _normalize_hosts(cls, hosts):
        if not hosts:
            return None
        hosts = frozenset(host.lower() for host in hosts)
        for host in hosts:
            if not host or "@" in host:
                raise ValueError(f"{host!r} is not a valid email host")
        return hosts

    @field_validator("domains")
    @classmethod
    def _normalize_domains(cls, domains):
        return domains or None

    @model_validator(mode="after")
    def _check_exclusive(self):
        if self.hosts and self.domains:
            raise ValueError("hosts and domains cannot both be given")
        return self


@ModuleRegistry.register
class EmailConstraint(Constraint[str]):
    """An email address: a local part, a single @ and a host."""
    config_type = EmailConfig

    def __init__(self, config: EmailConfig | None = None, **options):
        super().__init__(config, **options)
        self._hosts = sorted(self.config.hosts) if self.config.hosts else None
        self.hostname = HostnameConstraint(domains=self.config.domains)

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False

        parts = value.split("@")
        if len(parts) != 2:
            return False

        local, host = parts
        if not LOCAL_EMAIL_PART(local):
            return False
        if self._hosts is not None:
            return host.lower() in self.config.hosts
        return self.hostname(host)

    def generate(self, rng: random.Random) -> str:
        local = LOCAL_EMAIL_PART.generate(rng)
        if self._hosts is not None:
            host = rng.choice(self._hosts)
        else:
            host = self.hostname.generate(rng)
        return f"{local}@{host}"


def email_address(**options) -> EmailConstraint:
    """Returns a constraint for an email address. See `EmailConfig` for the options."""
    return EmailConstraint(**options)
