"""
Persistence gateway.

Every durable read and write issued by the application goes through the
``Storage`` class.  Methods are synchronous, open their own connection
and return plain dictionaries (or ``None`` when a row is missing);
services turn those into schemas.

Compound writes that protect an invariant run inside
``core.db.transaction`` so the check and the write are one unit:

* ``register_for_event`` increments the event counter with a
  conditional update and inserts the registration in the same
  transaction; the ``UNIQUE(user_id, event_id)`` constraint backs up the
  duplicate check.
* ``update_application_status`` writes the application status and the
  applicant's new role together.

Integrity failures surface as the ``StorageError`` subclasses below.
"""

import json
import logging
import sqlite3
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .db import get_cursor, transaction

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for integrity failures reported by the gateway."""


class EventNotFound(StorageError):
    pass


class EventFull(StorageError):
    pass


class AlreadyRegistered(StorageError):
    pass


class DuplicateApplication(StorageError):
    pass


class DuplicateEmail(StorageError):
    pass


class CapacityBelowRegistered(StorageError):
    pass


USER_COLUMNS = "id, name, email, password, role, created_at"
EVENT_COLUMNS = "id, title, description, date, location, image_url, capacity, registered, status, created_at"
EVENT_FIELDS = {"title", "description", "date", "location", "image_url", "capacity", "status"}


def _row(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    return dict(row) if row is not None else None


def _application(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    data = dict(row)
    data["interests"] = json.loads(data["interests"]) if data["interests"] else []
    return data


def _sql_value(value: Any) -> Any:
    # Enums and datetimes arrive from pydantic models.
    if hasattr(value, "value"):
        return value.value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


class Storage:
    """Sole issuer of reads and writes against the database."""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @classmethod
    def get_user(cls, user_id: int) -> Optional[Dict[str, Any]]:
        with get_cursor() as cursor:
            row = cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            return _row(row)

    @classmethod
    def get_user_by_email(cls, email: str) -> Optional[Dict[str, Any]]:
        with get_cursor() as cursor:
            row = cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE email = ?", (email,)).fetchone()
            return _row(row)

    @classmethod
    def list_users(cls) -> List[Dict[str, Any]]:
        with get_cursor() as cursor:
            rows = cursor.execute(f"SELECT {USER_COLUMNS} FROM users ORDER BY id").fetchall()
            return [dict(row) for row in rows]

    @classmethod
    def create_user(cls, name: str, email: str, password_hash: str, role: str) -> Dict[str, Any]:
        """Insert a user.  Raises ``DuplicateEmail`` if the email is taken."""
        with transaction() as cursor:
            try:
                cursor.execute(
                    "INSERT INTO users (name, email, password, role) VALUES (?, ?, ?, ?)",
                    (name, email, password_hash, _sql_value(role)),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateEmail(email) from exc
            row = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
            return dict(row)

    @classmethod
    def set_user_role(cls, user_id: int, role: str) -> Optional[Dict[str, Any]]:
        with transaction() as cursor:
            cursor.execute("UPDATE users SET role = ? WHERE id = ?", (_sql_value(role), user_id))
            if cursor.rowcount == 0:
                return None
            row = cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            return dict(row)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @classmethod
    def get_event(cls, event_id: int) -> Optional[Dict[str, Any]]:
        with get_cursor() as cursor:
            row = cursor.execute(f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ?", (event_id,)).fetchone()
            return _row(row)

    @classmethod
    def list_events(cls, status: Optional[str] = None) -> List[Dict[str, Any]]:
        query = f"SELECT {EVENT_COLUMNS} FROM events"
        params: list = []
        if status is not None:
            query += " WHERE status = ?"
            params.append(_sql_value(status))
        query += " ORDER BY date DESC"
        with get_cursor() as cursor:
            return [dict(row) for row in cursor.execute(query, tuple(params)).fetchall()]

    @classmethod
    def create_event(cls, fields: Dict[str, Any], registered: int = 0) -> Dict[str, Any]:
        """Insert an event.  ``registered`` is only non-zero when seeding."""
        data = {key: _sql_value(value) for key, value in fields.items() if key in EVENT_FIELDS}
        data["registered"] = registered
        columns = ", ".join(data)
        placeholders = ", ".join("?" for _ in data)
        with transaction() as cursor:
            cursor.execute(
                f"INSERT INTO events ({columns}) VALUES ({placeholders})",
                tuple(data.values()),
            )
            row = cursor.execute(
                f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
            return dict(row)

    @classmethod
    def update_event(cls, event_id: int, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update.

        Returns ``None`` if the event does not exist.  Raises
        ``CapacityBelowRegistered`` when the new capacity would be
        smaller than the number of registrations already taken.
        """
        data = {key: _sql_value(value) for key, value in updates.items() if key in EVENT_FIELDS}
        with transaction() as cursor:
            row = cursor.execute("SELECT registered FROM events WHERE id = ?", (event_id,)).fetchone()
            if row is None:
                return None
            if "capacity" in data and data["capacity"] < row["registered"]:
                raise CapacityBelowRegistered(event_id)
            if data:
                assignments = ", ".join(f"{key} = ?" for key in data)
                cursor.execute(
                    f"UPDATE events SET {assignments} WHERE id = ?",
                    (*data.values(), event_id),
                )
            row = cursor.execute(f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ?", (event_id,)).fetchone()
            return dict(row)

    @classmethod
    def delete_event(cls, event_id: int) -> bool:
        """Delete an event and, by cascade, its registrations."""
        with transaction() as cursor:
            cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
            return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Registrations
    # ------------------------------------------------------------------

    @classmethod
    def register_for_event(cls, event_id: int, user_id: int) -> Dict[str, Any]:
        """Record a registration and take one seat, atomically.

        Raises ``EventNotFound``, ``AlreadyRegistered`` or ``EventFull``;
        in each case nothing is written.
        """
        with transaction() as cursor:
            event = cursor.execute("SELECT id FROM events WHERE id = ?", (event_id,)).fetchone()
            if event is None:
                raise EventNotFound(event_id)
            existing = cursor.execute(
                "SELECT id FROM event_registrations WHERE user_id = ? AND event_id = ?",
                (user_id, event_id),
            ).fetchone()
            if existing is not None:
                raise AlreadyRegistered(event_id)
            # The seat is taken only if one is left; no separate read of
            # the counter is trusted.
            cursor.execute(
                "UPDATE events SET registered = registered + 1 WHERE id = ? AND registered < capacity",
                (event_id,),
            )
            if cursor.rowcount == 0:
                raise EventFull(event_id)
            try:
                cursor.execute(
                    "INSERT INTO event_registrations (user_id, event_id) VALUES (?, ?)",
                    (user_id, event_id),
                )
            except sqlite3.IntegrityError as exc:
                raise AlreadyRegistered(event_id) from exc
            row = cursor.execute(
                "SELECT id, user_id, event_id, registered_at FROM event_registrations WHERE id = ?",
                (cursor.lastrowid,),
            ).fetchone()
            return dict(row)

    @classmethod
    def list_user_registrations(cls, user_id: int) -> List[Dict[str, Any]]:
        with get_cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, user_id, event_id, registered_at FROM event_registrations "
                "WHERE user_id = ? ORDER BY registered_at DESC, id DESC",
                (user_id,),
            ).fetchall()
            return [dict(row) for row in rows]

    @classmethod
    def list_event_registrations(cls, event_id: int) -> List[Dict[str, Any]]:
        with get_cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, user_id, event_id, registered_at FROM event_registrations "
                "WHERE event_id = ? ORDER BY id",
                (event_id,),
            ).fetchall()
            return [dict(row) for row in rows]

    # ------------------------------------------------------------------
    # Donations
    # ------------------------------------------------------------------

    @classmethod
    def create_donation(cls, user_id: Optional[int], fields: Dict[str, Any]) -> Dict[str, Any]:
        with transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO donations (user_id, amount, donation_type, status, payment_id, donor_name, donor_email)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    str(fields["amount"]),
                    _sql_value(fields.get("donation_type", "one-time")),
                    _sql_value(fields.get("status", "pending")),
                    fields.get("payment_id"),
                    fields.get("donor_name"),
                    fields.get("donor_email"),
                ),
            )
            row = cursor.execute("SELECT * FROM donations WHERE id = ?", (cursor.lastrowid,)).fetchone()
            return dict(row)

    @classmethod
    def list_donations(cls, user_id: Optional[int] = None) -> List[Dict[str, Any]]:
        query = "SELECT * FROM donations"
        params: tuple = ()
        if user_id is not None:
            query += " WHERE user_id = ?"
            params = (user_id,)
        query += " ORDER BY created_at DESC, id DESC"
        with get_cursor() as cursor:
            return [dict(row) for row in cursor.execute(query, params).fetchall()]

    @classmethod
    def total_completed_donations(cls) -> Decimal:
        """Sum completed donation amounts exactly.

        Amounts are stored as decimal strings and summed with ``Decimal``
        rather than SQL arithmetic, which would go through floats.
        """
        with get_cursor() as cursor:
            rows = cursor.execute("SELECT amount FROM donations WHERE status = 'completed'").fetchall()
        return sum((Decimal(row["amount"]) for row in rows), Decimal("0.00"))

    # ------------------------------------------------------------------
    # Volunteer applications
    # ------------------------------------------------------------------

    @classmethod
    def create_volunteer_application(cls, user_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an application.  Raises ``DuplicateApplication``."""
        with transaction() as cursor:
            try:
                cursor.execute(
                    """
                    INSERT INTO volunteer_applications
                        (user_id, name, email, phone, availability, interests, message)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        fields["name"],
                        fields["email"],
                        fields.get("phone"),
                        fields["availability"],
                        json.dumps(fields.get("interests") or []),
                        fields.get("message"),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateApplication(user_id) from exc
            row = cursor.execute(
                "SELECT * FROM volunteer_applications WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
            return _application(row)

    @classmethod
    def get_volunteer_application(cls, application_id: int) -> Optional[Dict[str, Any]]:
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT * FROM volunteer_applications WHERE id = ?", (application_id,)
            ).fetchone()
            return _application(row)

    @classmethod
    def get_user_volunteer_application(cls, user_id: int) -> Optional[Dict[str, Any]]:
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT * FROM volunteer_applications WHERE user_id = ?", (user_id,)
            ).fetchone()
            return _application(row)

    @classmethod
    def list_volunteer_applications(cls) -> List[Dict[str, Any]]:
        with get_cursor() as cursor:
            rows = cursor.execute(
                "SELECT * FROM volunteer_applications ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [_application(row) for row in rows]

    @classmethod
    def update_application_status(
        cls,
        application_id: int,
        status: str,
        applicant_role: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Set an application's status and optionally the applicant's role.

        Both writes share one transaction: either both are visible or
        neither is.  Returns ``None`` if the application does not exist.
        """
        with transaction() as cursor:
            row = cursor.execute(
                "SELECT user_id FROM volunteer_applications WHERE id = ?", (application_id,)
            ).fetchone()
            if row is None:
                return None
            cursor.execute(
                "UPDATE volunteer_applications SET status = ? WHERE id = ?",
                (_sql_value(status), application_id),
            )
            if applicant_role is not None:
                cursor.execute(
                    "UPDATE users SET role = ? WHERE id = ?",
                    (_sql_value(applicant_role), row["user_id"]),
                )
            updated = cursor.execute(
                "SELECT * FROM volunteer_applications WHERE id = ?", (application_id,)
            ).fetchone()
            return _application(updated)

    # ------------------------------------------------------------------
    # Contact submissions
    # ------------------------------------------------------------------

    @classmethod
    def create_contact_submission(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        with transaction() as cursor:
            cursor.execute(
                "INSERT INTO contact_submissions (name, email, subject, message) VALUES (?, ?, ?, ?)",
                (fields["name"], fields["email"], fields["subject"], fields["message"]),
            )
            row = cursor.execute(
                "SELECT * FROM contact_submissions WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
            return dict(row)

    @classmethod
    def list_contact_submissions(cls) -> List[Dict[str, Any]]:
        with get_cursor() as cursor:
            rows = cursor.execute(
                "SELECT * FROM contact_submissions ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [dict(row) for row in rows]

    @classmethod
    def update_contact_status(cls, submission_id: int, status: str) -> Optional[Dict[str, Any]]:
        with transaction() as cursor:
            cursor.execute(
                "UPDATE contact_submissions SET status = ? WHERE id = ?",
                (_sql_value(status), submission_id),
            )
            if cursor.rowcount == 0:
                return None
            row = cursor.execute(
                "SELECT * FROM contact_submissions WHERE id = ?", (submission_id,)
            ).fetchone()
            return dict(row)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    @classmethod
    def counts(cls) -> Dict[str, int]:
        """Row counts used by the admin overview."""
        with get_cursor() as cursor:
            def scalar(sql: str) -> int:
                return cursor.execute(sql).fetchone()[0]

            return {
                "total_events": scalar("SELECT COUNT(*) FROM events"),
                "upcoming_events": scalar("SELECT COUNT(*) FROM events WHERE status = 'upcoming'"),
                "total_registrations": scalar("SELECT COUNT(*) FROM event_registrations"),
                "total_donations": scalar("SELECT COUNT(*) FROM donations"),
                "total_volunteer_applications": scalar("SELECT COUNT(*) FROM volunteer_applications"),
                "pending_applications": scalar(
                    "SELECT COUNT(*) FROM volunteer_applications WHERE status = 'pending'"
                ),
                "new_contact_submissions": scalar(
                    "SELECT COUNT(*) FROM contact_submissions WHERE status = 'new'"
                ),
            }
