"""Access control app package.

Holds the role/route rules shared by every access check in the project
(``rules``), the request middleware protecting page routes from the auth
cookies, and the DRF permission classes used by the API views.
"""
