"""Kudos Wall: command-line client for the peer-recognition kudos wall.

Authenticated users browse and create kudo cards; admins manage roles
and read recognition analytics.
"""

__version__ = "0.1.0"
