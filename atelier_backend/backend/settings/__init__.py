# backend/settings/__init__.py
"""
Settings package. Select a concrete module with DJANGO_SETTINGS_MODULE:
- backend.settings.dev   (local development, tests)
- backend.settings.prod  (production: Postgres + Redis required)
"""
