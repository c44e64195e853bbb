"""
Engine and session lifecycle.

One Database per process, built in the API lifespan (or by a script) and
kept on app.state. Each request gets its own AsyncSession from
Database.session(), committed when the handler returns and rolled back
when it raises. Repositories receive that session and only flush.
"""

from bloghub.shared.db.session import Database

__all__ = ["Database"]
