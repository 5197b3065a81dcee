# database/base.py
"""
Declarative base shared by every table definition.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
