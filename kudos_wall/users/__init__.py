"""Admin user management: listing users and changing their roles."""
