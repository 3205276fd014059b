"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter`` for one domain.  Handlers resolve
the caller through the dependencies in ``core.security`` and delegate to
a service; errors raised by services are rendered by the handlers
registered in ``main.create_app``.
"""
