import pytest

from addy.models import Task
from recommendation.stats import compute_overall_progress


def _tasks(*completions, deadline=None):
    return [Task(name=f"t{i}", completion=c, deadline=deadline) for i, c in enumerate(completions)]


def test_three_tasks_one_in_each_state():
    p = compute_overall_progress(_tasks(1, 0.5, 0))
    assert p.completed_tasks == 1
    assert p.in_progress_tasks == 1
    assert p.not_started_tasks == 1
    assert p.completion == 0.5
    assert p.total_tasks == 3


def test_empty_task_list():
    p = compute_overall_progress([])
    assert p.completion == 0
    assert p.total_tasks == 0
    assert p.tasks_with_deadlines == 0


@pytest.mark.parametrize(
    "completions",
    [(0.2,), (1, 1, 1), (0, 0), (0.1, 0.9, 1, 0, 0.33), (1.2, -0.5, 0.5)],
)
def test_partition_and_mean(completions):
    tasks = _tasks(*completions)
    p = compute_overall_progress(tasks)
    assert p.completed_tasks + p.in_progress_tasks + p.not_started_tasks == p.total_tasks
    assert p.completion == pytest.approx(sum(t.completion for t in tasks) / len(tasks))


def test_tasks_with_deadlines():
    tasks = _tasks(0, 0.5, deadline="2026-11-01") + _tasks(1)
    assert compute_overall_progress(tasks).tasks_with_deadlines == 2
