import logging
import os

from sqlstrings import sql
from sqlstrings.observability import (
    ObservabilitySettings,
    QueryObservation,
    compose_event_observers,
    make_json_event_logger,
)
from sqlstrings.execution.sqlite import SqliteExecutor
from sqlstrings.template import SqlTemplate

logging.basicConfig(level=logging.INFO, format="%(name)s %(message)s")
os.makedirs(os.path.join("static", "test-sqlite"), exist_ok=True)


def log_query(event: QueryObservation) -> None:
    print(
        f"[{event.dialect}] op={event.operation} success={event.succeeded} "
        f"duration_ms={event.duration_ms:.2f} params={event.param_count} metadata={dict(event.metadata)}"
    )


event_logger = make_json_event_logger(logger=logging.getLogger("sqlstrings.events"))
settings = ObservabilitySettings(
    query_observer=log_query,
    event_observer=compose_event_observers(event_logger),
    metadata={"service": "sqlstrings-sample"},
)

# Templates scanned ahead of time report a template.scan event
insert_user = SqlTemplate("INSERT INTO users (id, name) VALUES ($id, $name)", observability_settings=settings)

with SqliteExecutor(
    connection_info="static/test-sqlite/db.sqlite",
    observability_settings=settings,
) as executor:
    executor.execute_raw("CREATE TABLE IF NOT EXISTS users (id INTEGER PRIMARY KEY, name TEXT)")
    executor.execute(insert_user.bind(id=1, name="Alice"))
    rows = executor.fetch_all(sql("SELECT id, name FROM users ORDER BY id"))
    print(rows)
    executor.execute_raw("DROP TABLE users")
