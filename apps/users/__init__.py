"""Users app package.

This module initializes the users app: the custom user model with a role
and a permission list, the authentication endpoints (email/password and
Google sign-in) and admin user management. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
