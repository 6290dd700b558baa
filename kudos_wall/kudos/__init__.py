"""Kudo cards: the entity, its wire shapes, the API repository and use cases."""
