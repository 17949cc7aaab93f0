"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks the feature packages use (settings,
DB wiring, logging). Keep lead-specific SQL and business rules in `leads/`.
"""
