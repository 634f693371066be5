"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or real classifiers
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("AGIFY_URL", "http://agify.test/")
os.environ.setdefault("GENDERIZE_URL", "http://genderize.test/")
os.environ.setdefault("NATIONALIZE_URL", "http://nationalize.test/")
