# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from itertools import islice

import hydra
from omegaconf import DictConfig, OmegaConf
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text
from tqdm import tqdm

from lockstep.core import *
from lockstep.modules import *


console = Console()


def sample(constraint: Constraint, samples: int, seed: int | None) -> None:
    table = Table(title=constraint.describe(), box=box.ROUNDED)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Value", style="white")
    table.add_column("Valid", style="green")

    for i, value in enumerate(islice(constraint.generator(seed), samples)):
        table.add_row(str(i), str(value), "✓" if constraint(value) else "✗")

    console.print(table)


def run_check(constraint: Constraint, samples: int, seed: int | None) -> CheckReport:
    report = CheckReport(constraint=constraint.describe(), seed=seed)
    for _ in tqdm(iter_check(constraint, samples, seed, report), total=samples, desc="Checking"):
        pass

    stats_table = Table(title="Generator Check", box=box.ROUNDED)
    stats_table.add_column("Metric", style="cyan", justify="right")
    stats_table.add_column("Value", style="yellow")
    stats_table.add_row("Constraint", report.constraint)
    stats_table.add_row("Seed", str(report.seed))
    stats_table.add_row("Samples", str(report.num_samples))
    stats_table.add_row("Failures", str(len(report.failures)))
    stats_table.add_row("Duration", str(report.finished_at - report.started_at))

    for failure in report.failures[:10]:
        stats_table.add_row("Failed value", repr(failure.value) if failure.error is None else failure.error, style="red")

    console.print(stats_table)
    if report.passed:
        console.print(Text("Every generated value conforms.", style="bold green"))
    else:
        console.print(Text("The generator produced non-conforming values.", style="bold red"))
    return report


@hydra.main(version_base=None, config_path="../conf", config_name="base")
def lockstep(cfg: DictConfig) -> None:
    constraint = ModuleRegistry.instantiate(cfg.constraint)
    if not isinstance(constraint, Constraint):
        raise ValueError(f"Config does not describe a constraint: {OmegaConf.to_yaml(cfg.constraint)}")

    if cfg.mode == "sample":
        sample(constraint, cfg.samples, cfg.seed)
    elif cfg.mode == "check":
        report = run_check(constraint, cfg.samples, cfg.seed)
        if not report.passed:
            raise SystemExit(1)
    else:
        raise ValueError(f"Unknown mode: {cfg.mode}")


if __name__ == "__main__":
    lockstep()
