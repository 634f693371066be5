"""Person Service Package — records people and enriches them with inferred demographics.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
