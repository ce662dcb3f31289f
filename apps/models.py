"""
Model registration for migrations: import all models that should be migrated by Alembic here.
When adding/removing apps in a private project, add/remove the corresponding imports here; no need to change alembic/env.py.
"""
from apps.users.models import User
from apps.routes.models import Route
from apps.tickets.models import Ticket

__all__ = ["User", "Route", "Ticket"]
