# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from .module import ModuleRegistry, BaseModule
from .constraint import INVALID, Config, ConfigurationError, Constraint, GeneratorOverride, ParseFailure, Problem
from .combinators import MemberOf, OneOf
from .check import CheckReport, Failure, check, iter_check

__all__ = [
    "BaseModule",
    "CheckReport",
    "Config",
    "ConfigurationError",
    "Constraint",
    "Failure",
    "GeneratorOverride",
    "INVALID",
    "MemberOf",
    "ModuleRegistry",
    "OneOf",
    "ParseFailure",
    "Problem",
    "check",
    "iter_check",
]
