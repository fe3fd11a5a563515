"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (settings, DB
connection, error envelope, logging). Keep feature-specific SQL and
request handling in the corresponding feature package (e.g. `users/`).
"""
