from datetime import timedelta

from taskplanner.core.services.scheduling.relaxation import relax_tight_schedule


def test_non_critical_estimates_are_trimmed(engine, make_task, make_options):
    tasks = [
        make_task("long", hours=80),
        make_task("x", hours=10),
        make_task("y", hours=40),
    ]
    result = engine.generate_schedule(tasks, make_options())
    assert result.critical_path == ("long",)

    plan = relax_tight_schedule(tasks, result)
    hours = {t.id: t.estimated_hours for t in plan.adjusted_tasks}

    assert hours == {"long": 80.0, "x": 8.0, "y": 36.0}
    assert plan.adjustments == (
        "Reduced the estimate of 'Task x' by 2.0 hours",
        "Reduced the estimate of 'Task y' by 4.0 hours",
    )
    assert tasks[1].estimated_hours == 10.0


def test_new_end_date_extends_latest_due(engine, make_task, make_options):
    tasks = [make_task("a", hours=16), make_task("b", hours=8, deps=["a"])]
    result = engine.generate_schedule(tasks, make_options())

    plan = relax_tight_schedule(tasks, result, additional_days=5)

    latest = max(s.due_date for s in result.schedules)
    assert plan.new_end_date == latest + timedelta(days=5)
    # both tasks are on the critical path
    assert plan.adjustments == ()


def test_empty_schedule_has_no_end_date(engine, make_options):
    plan = relax_tight_schedule([], engine.generate_schedule([], make_options()))

    assert plan.new_end_date is None
    assert plan.adjusted_tasks == ()
