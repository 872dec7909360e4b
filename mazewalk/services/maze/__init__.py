"""Maze domain services: generation, move validation and match lifecycle.

Routes and socket handlers import from here; nothing in this package knows
about HTTP. The engine is stateless apart from its collaborators, so one
instance is shared by every request.
"""
