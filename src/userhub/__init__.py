"""userhub - user account management with a pluggable identity store.

This package handles:
- User records (CRUD) and role memberships
- The identity store adapter (user, password and role store contracts)
- Authentication (registration, sign-in, tokens, sign-out)
- An HTTP API and an administrative CLI
"""

__version__ = "0.1.0"
