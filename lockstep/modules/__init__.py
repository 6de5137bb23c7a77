# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

# Importing this package registers every constraint class and defines the named constraints
from . import numbers, internet, strings
from .numbers import *
from .internet import *
from .strings import *
