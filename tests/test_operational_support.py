import logging

from taskplanner.infra.db.base import create_session_factory
from taskplanner.infra.db.models import TaskORM
from taskplanner.infra.logging_config import setup_logging
from taskplanner.infra.operational_support import (
    TraceIdLogFilter,
    bind_trace_id,
    create_trace_id,
    current_trace_id,
)
from taskplanner.infra.path import default_db_path, user_data_dir


def test_trace_id_binding_is_scoped():
    assert current_trace_id() is None
    with bind_trace_id("outer") as outer:
        assert outer == "outer"
        with bind_trace_id() as generated:
            assert generated.startswith("run-")
            assert current_trace_id() == generated
        assert current_trace_id() == "outer"
    assert current_trace_id() is None


def test_generated_trace_ids_are_unique():
    assert create_trace_id() != create_trace_id()


def test_filter_marks_records_without_trace():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert TraceIdLogFilter().filter(record)
    assert record.trace_id == "-"


def test_setup_logging_writes_trace_to_file(tmp_path, restore_logging):
    log_file = setup_logging(log_dir=tmp_path / "logs", console=False)

    with bind_trace_id("abc"):
        logging.getLogger("taskplanner.test").info("schedule generated")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file == tmp_path / "logs" / "taskplanner.log"
    content = log_file.read_text(encoding="utf-8")
    assert "trace=abc taskplanner.test - schedule generated" in content


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_logging):
    setup_logging(log_dir=tmp_path, console=True)
    setup_logging(log_dir=tmp_path, console=True)

    assert len(logging.getLogger().handlers) == 2


def test_data_dir_override(tmp_path, monkeypatch):
    target = tmp_path / "data"
    monkeypatch.setenv("TP_DATA_DIR", str(target))

    assert user_data_dir() == target
    assert target.is_dir()
    assert default_db_path() == target / "taskplanner.db"


def test_session_factory_creates_schema(tmp_path):
    factory = create_session_factory(f"sqlite:///{(tmp_path / 'tp.db').as_posix()}")

    with factory() as session:
        session.add(TaskORM(id="a", project_id="p", title="A", estimated_hours=2.0))
        session.commit()
        assert session.get(TaskORM, "a").buffer_days == 0
