"""Pydantic schemas package.

Folder intent:
  common.py  — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  tour.py    — Tour request DTOs, response models and report rows
"""
