from __future__ import annotations

from typing import Sequence

from addy.models import OverallProgress, Task


def compute_overall_progress(tasks: Sequence[Task]) -> OverallProgress:
    total = len(tasks)
    completion = sum(t.completion for t in tasks) / total if total else 0.0

    return OverallProgress(
        completion=completion,
        total_tasks=total,
        completed_tasks=sum(1 for t in tasks if t.completion == 1),
        in_progress_tasks=sum(1 for t in tasks if 0 < t.completion < 1),
        not_started_tasks=sum(1 for t in tasks if t.completion == 0),
        tasks_with_deadlines=sum(1 for t in tasks if t.deadline is not None),
    )
