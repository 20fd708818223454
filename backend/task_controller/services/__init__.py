"""Services Layer — use cases that sequence store calls around the pure core.

Invariants:
    - Services depend on core/ Protocols only, never on infrastructure/ classes
    - Mutating task use cases run inside exactly one transaction scope

Design Decisions:
    - Impureim sandwich: IO here, rules (placeholder tags, default limits) in core/
"""
