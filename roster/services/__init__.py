"""
Service layer package.

Each service module encapsulates one concern.  Services are the only
layer that talks to the roster API; routes never call the API client
directly (the health check excepted).

Import services in route modules as needed::

    from roster.services import department_service
"""
