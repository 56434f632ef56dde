# routers/__init__.py
from . import agreements, auth, inspections, media, notifications, payments, properties, tickets

ALL_ROUTERS = [
     auth.router,
     properties.router,
     agreements.router,
     payments.router,
     inspections.router,
     notifications.router,
     tickets.router,
     media.router,
]

__all__ = ["ALL_ROUTERS"]
