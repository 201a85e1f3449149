from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, BinaryIO, Optional

from ..clients.repository import ClientRepository
from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_RECENT_CHECKINS_LIMIT
from ..core.enums import CheckInMethod
from ..core.exceptions import ClientNotFoundError, ValidationError
from .factory import ClientMatcherFactory
from .model import CheckInResult, RecentCheckIn
from .qr import decode_qr_image
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _coerce_method(value: Any) -> CheckInMethod:
    try:
        return CheckInMethod(value)
    except ValueError:
        raise ValidationError(f"Unknown check-in method: {value!r}")


class CheckInService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        clients: ClientRepository,
        *,
        matcher_factory: Optional[ClientMatcherFactory] = None,
        recent_limit: int = DEFAULT_RECENT_CHECKINS_LIMIT,
    ):
        self._attendance = attendance
        self._clients = clients
        self._matcher = matcher_factory or ClientMatcherFactory()
        self._recent_limit = int(recent_limit)

    def check_in(
        self,
        org_id: str,
        token: str,
        method: Any = CheckInMethod.MANUAL,
        *,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        """Resolve ``token`` to one client of the organization and log a check-in.

        Precedence: client id, name fragment, phone, email. When several
        clients match in one step the first in directory order is taken and a
        warning is logged; callers needing certainty should use the client id.

        Raises:
            ValidationError: blank token or unknown method.
            ClientNotFoundError: nothing matched; no attendance row is written.
            StorageError: reading the directory or appending the entry failed.
        """
        token = (token or "").strip()
        if not token:
            raise ValidationError("Check-in token is required")
        method = _coerce_method(method)
        now = now or now_utc()

        directory = self._clients.list_for_org(org_id)
        outcome = self._matcher.match(token, directory)
        if outcome is None:
            raise ClientNotFoundError("No client matches this check-in")
        if outcome.candidates > 1:
            logger.warning(
                "Ambiguous check-in token in org %s: %d clients matched by %s, using %s",
                org_id,
                outcome.candidates,
                outcome.strategy,
                outcome.client.client_id,
            )

        entry = self._attendance.append(client_id=outcome.client.client_id, method=method, checkin_at=now)
        return CheckInResult(client=outcome.client, timestamp=entry.checkin_at, method=method)

    def check_in_from_qr_image(self, org_id: str, stream: BinaryIO, *, now: Optional[datetime] = None) -> CheckInResult:
        token = decode_qr_image(stream)
        if not token:
            raise ValidationError("No QR code found in the image")
        return self.check_in(org_id, token, CheckInMethod.QR, now=now)

    def recent_check_ins(self, org_id: str, limit: Optional[int] = None) -> list[RecentCheckIn]:
        return list(self._attendance.list_recent_for_org(org_id, self._recent_limit if limit is None else limit))
