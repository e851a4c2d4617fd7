# app/db/base.py
from sqlalchemy.orm import declarative_base

# Shared Base for all ORM models
Base = declarative_base()
