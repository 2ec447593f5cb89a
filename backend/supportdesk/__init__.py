"""SupportDesk Application Package — chat and transaction backend for support agents.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
