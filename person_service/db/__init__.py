"""Database Metadata — the SQLAlchemy declarative Base shared by models and migrations."""
