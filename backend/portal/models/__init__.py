"""ORM Models — SQLAlchemy declarative models for all portal entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer surrogate keys named <entity>_id, matching the SQL schema

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from portal.models.user import User  # noqa: F401
from portal.models.faculty import Faculty  # noqa: F401
from portal.models.semester import Semester  # noqa: F401
from portal.models.course import Course  # noqa: F401
from portal.models.registration import Registration  # noqa: F401
from portal.models.certificate import Certificate  # noqa: F401
from portal.models.transaction import Transaction  # noqa: F401
from portal.models.fee_paid import FeePaid  # noqa: F401
from portal.models.room import Room  # noqa: F401
from portal.models.event import Event  # noqa: F401
from portal.models.booking import Booking  # noqa: F401
