"""v1 router package — all /api/v1/* endpoints live here.

Files:
  tours.py  — Tour CRUD, top-5 alias, stats and monthly plan

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
