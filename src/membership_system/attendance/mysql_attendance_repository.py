from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import as_utc
from ..core.enums import CheckInMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceLogEntry, RecentCheckIn
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, *, client_id: str, method: CheckInMethod, checkin_at: datetime) -> AttendanceLogEntry:
        # DATETIME columns hold naive UTC.
        stored_at = as_utc(checkin_at).replace(tzinfo=None)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(client_id, method, checkin_at)
                VALUES(%s,%s,%s)
                """,
                (client_id, method.value, stored_at),
            )
            return AttendanceLogEntry(
                attendance_id=int(cur.lastrowid),
                client_id=client_id,
                method=method,
                checkin_at=checkin_at,
            )

    def list_recent_for_org(self, org_id: str, limit: int) -> Sequence[RecentCheckIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attendance_id, a.client_id, c.full_name, a.method, a.checkin_at
                FROM attendance_logs a
                JOIN clients c ON c.client_id = a.client_id
                WHERE c.org_id=%s
                ORDER BY a.checkin_at DESC, a.attendance_id DESC
                LIMIT %s
                """,
                (org_id, int(limit)),
            )
            return [
                RecentCheckIn(
                    attendance_id=int(r["attendance_id"]),
                    client_id=str(r["client_id"]),
                    full_name=r["full_name"],
                    method=CheckInMethod(r["method"]),
                    checkin_at=r["checkin_at"],
                )
                for r in fetchall(cur)
            ]
