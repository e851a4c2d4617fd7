# app/models/__init__.py
from app.db.base import Base  # noqa: F401

from . import user              # noqa: F401
from . import staff_compliance  # noqa: F401
from . import route             # noqa: F401
