"""Authentication: session storage, the auth gateway, session manager and role guards."""
