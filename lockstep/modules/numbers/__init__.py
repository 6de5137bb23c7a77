# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from . import fixed_point, integer
from .fixed_point import DecimalConfig, DecimalConstraint, decimal_in
from .integer import IntRangeConfig, IntRangeConstraint, int_in
