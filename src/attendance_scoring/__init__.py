"""Attendance scoring package.

``scoring`` is a pure engine: it turns arrival timestamps into per-session
percentages and folds them into one cumulative score per (user, event).
The ``attendance`` feature module is the thin service/controller layer that
feeds it plain records.
"""
