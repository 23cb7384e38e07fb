"""
Application package.

Contains the FastAPI entrypoint (``main``) and its layers: ``api``
(routers), ``schemas`` (request/response models), ``services``
(business logic and SQL) and ``core`` (configuration, database,
logging and errors).
"""
