"""Geo-fenced attendance backend.

Feature modules (locations, attendance, summaries, corrections, leave, ...)
each expose a model, a repository Protocol with a MySQL adapter, a service
holding the business rules, and a thin Flask controller.
"""
