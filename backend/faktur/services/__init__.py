"""Services Layer — async orchestration of the pure core around DB sessions.

Invariants:
    - One service class per aggregate, constructed with an AsyncSession
    - Every multi-row mutation ends in exactly one commit (all-or-nothing)

Design Decisions:
    - Services raise core errors; routes never translate them by hand
"""
