"""Database Declarations — SQLAlchemy Base shared by models and the session manager."""
