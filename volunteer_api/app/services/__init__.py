"""
Service layer.

Each service encapsulates the database access and rules of one domain.
Services raise the errors defined in ``core.errors`` and leave their
translation to HTTP responses to the application.
"""
