"""Services Layer — enrichment orchestration and request-scoped person operations.

Invariants:
    - Services call pure core functions around their IO (impureim sandwich)
    - Store and classifier are injected, never imported as globals
"""
