"""Services package — all business logic lives here, never in routers.

Files:
  tour.py  — Tour CRUD rules, top-5 preset, stats and monthly plan

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
