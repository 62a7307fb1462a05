"""
Database utilities for Mess Feedback

Contains hall seeding.
"""
from app.db.seed_halls import seed_halls

__all__ = ["seed_halls"]
