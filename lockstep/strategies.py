# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from hypothesis import strategies as st

from lockstep.core.constraint import Constraint
from lockstep.core.module import ModuleRegistry


def from_constraint(constraint: Constraint | str) -> st.SearchStrategy:
    """A Hypothesis strategy drawing from a constraint's generator.

    Each example is seeded by Hypothesis, so failures replay and seeds are honoured.
    Generators make many small draws, so a real seeded Random is used rather than
    a byte-level one.
    """
    if isinstance(constraint, str):
        constraint = ModuleRegistry.get(constraint)
    return st.randoms(use_true_random=True).map(constraint.generate)
