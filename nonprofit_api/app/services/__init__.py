"""
Service layer.

Each service encapsulates the business rules of one domain and talks to
the database exclusively through ``core.storage.Storage``.  Services
raise the exceptions from ``core.errors``; they never build HTTP
responses themselves.
"""
