import time
from datetime import date
from types import SimpleNamespace

import pytest
from psycopg2 import extensions, pool

import config
from conftest import FakeNotificationRepository, make_schedule
from db import connection
from repositories.schedule_repo import ScheduleRepository
from services.schedule_service import ScheduleService


class FakeCursor:
    rowcount = 1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        time.sleep(0.02)

    def fetchone(self):
        return (1,)


class FakeConnection:
    def __init__(self):
        self.closed = 0
        self.info = SimpleNamespace(transaction_status=extensions.TRANSACTION_STATUS_IDLE)

    def cursor(self):
        return FakeCursor()

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        self.closed = 1


class FakeConnectionPool(pool.ThreadedConnectionPool):
    """The real psycopg2 pool, handing out connections that never touch a server."""

    def _connect(self, key=None):
        conn = FakeConnection()
        if key is not None:
            self._used[key] = conn
            self._rused[id(conn)] = key
        else:
            self._pool.append(conn)
        return conn


class ListedScheduleRepository(ScheduleRepository):
    def __init__(self, schedules):
        self.schedules = schedules

    def get_active(self):
        return list(self.schedules)


@pytest.fixture
def small_pool(monkeypatch):
    monkeypatch.setattr(connection.pool, "ThreadedConnectionPool", FakeConnectionPool)
    connection.init_pool(min_conn=1, max_conn=3)
    yield
    connection.close_pool()


def test_more_workers_than_connections_all_advance(small_pool):
    today = date(2024, 3, 1)
    schedules = [
        make_schedule(id=f"s{i}", next_donation_date=today, reminder_enabled=False)
        for i in range(6)
    ]
    service = ScheduleService(
        ListedScheduleRepository(schedules), FakeNotificationRepository(), max_workers=6,
    )

    result = service.process(today=today)

    assert result.errors == []
    assert result.schedules_advanced == 6


def test_checkout_times_out_when_pool_stays_full(small_pool):
    held = [connection.get_connection() for _ in range(3)]

    with pytest.raises(pool.PoolError):
        connection.get_connection(timeout=0.01)

    connection.release_connection(held.pop())
    conn = connection.get_connection(timeout=0.01)
    connection.release_connection(conn)
    for conn in held:
        connection.release_connection(conn)


def test_pool_is_sized_for_every_worker():
    assert config.DB_POOL_MAX >= config.JOB_MAX_WORKERS + 1
