"""Infrastructure Layer — database session manager, transaction runner, SQL stores, logging.

Invariants:
    - Implements the Protocols from core/repository_protocols.py
    - SQLAlchemy exceptions never escape this package untranslated

Design Decisions:
    - One module per table store: each stays a handful of statements
"""
