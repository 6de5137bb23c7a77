# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from lockstep.core.combinators import MemberOf, OneOf
from lockstep.core.module import ModuleRegistry
from lockstep.modules.numbers.integer import IntRangeConstraint

from . import email, ip, tlds
from .email import LOCAL_EMAIL_PART, EmailConfig, EmailConstraint, LocalEmailPartConstraint, email_address
from .hostname import HOST_PART, HostnameConfig, HostnameConstraint, HostPartConstraint, fully_qualified_hostname, hostname
from .ip import IpAddressConstraint
from .tlds import load_tlds
from .url import UrlConfig, UrlConstraint, url

COMMON_DOMAINS = frozenset({"com", "edu", "net", "org"})
COMMON_ALIASES = frozenset({"localhost"})
COMMON_EMAIL_HOSTS = frozenset({"gmail.com", "yahoo.com", "outlook.com", "aol.com"})

ModuleRegistry.define("host-part", HOST_PART)
ModuleRegistry.define("fully-qualified-hostname", fully_qualified_hostname())
ModuleRegistry.define(
    "fully-qualified-common-hostname",
    HostnameConstraint(domains=COMMON_DOMAINS, min_depth=2, max_depth=4)
)
ModuleRegistry.define(
    "common-hostname",
    OneOf(branches={
        "alias": MemberOf(values=COMMON_ALIASES),
        "hostname": ModuleRegistry.get("fully-qualified-common-hostname"),
    })
)
ModuleRegistry.define("local-email-part", LOCAL_EMAIL_PART)
ModuleRegistry.define("email-address", EmailConstraint(domains=load_tlds()))
ModuleRegistry.define("common-email-address", EmailConstraint(hosts=COMMON_EMAIL_HOSTS))
ModuleRegistry.define("web-url", UrlConstraint(schemes={"http", "https"}))
ModuleRegistry.define("ip-address", IpAddressConstraint())
ModuleRegistry.define("ip-port", IntRangeConstraint(min=1, max=65536))
ModuleRegistry.define("privileged-ip-port", IntRangeConstraint(min=1, max=1024))
ModuleRegistry.define("unprivileged-ip-port", IntRangeConstraint(min=1025, max=65536))
