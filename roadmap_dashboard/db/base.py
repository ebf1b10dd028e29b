# roadmap_dashboard/db/base.py

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# IMPORTANT: import all model modules so they register with Base.metadata
# before create_all is called.

from roadmap_dashboard.db import models  # noqa: F401,E402  (side-effect import)
