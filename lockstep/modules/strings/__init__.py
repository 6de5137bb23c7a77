# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from lockstep.core.module import ModuleRegistry

from . import charseq, string_like
from .charseq import CharSeqConfig, CharSeqConstraint, LabelCharSeqConstraint, charseq_in
from .string_like import StringLike, StringLikeConfig, string_in

ModuleRegistry.define("hostname-charseq", LabelCharSeqConstraint())
ModuleRegistry.define("hostname-string", string_like.string_like("hostname-charseq"))
