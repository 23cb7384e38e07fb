"""
Version 1 of the API.

Mounted under ``/api`` because the mobile app was built against
unversioned paths.  Breaking changes should go into a new version
subpackage mounted under its own prefix.
"""
