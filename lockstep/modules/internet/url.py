# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import random
import re
from typing import Any
from urllib.parse import SplitResult, urlsplit

from pydantic import field_validator

from lockstep.core.constraint import Config, Constraint, ParseFailure
from lockstep.core.module import ModuleRegistry
from lockstep.modules.internet.hostname import HostnameConstraint, fully_qualified_hostname

DEFAULT_SCHEMES = ("http", "https")

# RFC 3986 unreserved, reserved and percent characters
URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*")
BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
SCHEME = re.compile(r"[a-z][a-z0-9+.\-]*")

_ANY_HOSTNAME = HostnameConstraint()


def parse_uri(value: str) -> SplitResult:
    """Split a URI into its components, raising ParseFailure if it is malformed."""
    if URI_CHARS.fullmatch(value) is None or BAD_ESCAPE.search(value):
        raise ParseFailure(f"{value!r} is not a URI")
    try:
        parts = urlsplit(value)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise ParseFailure(f"{value!r} is not a URI") from e
    return parts


class UrlConfig(Config):
    """
    schemes: the set of allowed schemes, matched case-insensitively
    hosts: the set of allowed hosts, matched case-insensitively
    """
    schemes: frozenset[str] | None = None
    hosts: frozenset[str] | None = None

    @field_validator("schemes")
    @classmethod
    def _normalize_schemes(cls, schemes):
        if not schemes:
            return None
        schemes = frozenset(scheme.lower() for scheme in schemes)
        for scheme in schemes:
            if SCHEME.fullmatch(scheme) is None:
                raise ValueError(f"{scheme!r} is not a valid URI scheme")
        return schemes

    @field_validator("hosts")
    @classmethod
    def _normalize_hosts(cls, hosts):
        if not hosts:
            return None
        hosts = frozenset(host.lower() for host in hosts)
        for host in hosts:
            if not _ANY_HOSTNAME(host):
                raise ValueError(f"{host!r} is not a valid URL host")
        return hosts


@ModuleRegistry.register
class UrlConstraint(Constraint[str]):
    """A URI, optionally restricted to a set of schemes and hosts."""
    config_type = UrlConfig

    def __init__(self, config: UrlConfig | None = None, **options):
        super().__init__(config, **options)
        self._schemes = sorted(self.config.schemes or DEFAULT_SCHEMES)
        self._hosts = sorted(self.config.hosts) if self.config.hosts else None

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            parts = parse_uri(value)
        except ParseFailure:
            return False

        if self.config.schemes and parts.scheme not in self.config.schemes:
            return False
        if self.config.hosts and parts.hostname not in self.config.hosts:
            return False
        return True

    def generate(self, rng: random.Random) -> str:
        scheme = rng.choice(self._schemes)
        if self._hosts is not None:
            host = rng.choice(self._hosts)
        else:
            host = fully_qualified_hostname().generate(rng)
        return f"{scheme}://{host}/"


def url(**options) -> UrlConstraint:
    """Returns a constraint for a URL. See `UrlConfig` for the options."""
    return UrlConstraint(**options)
