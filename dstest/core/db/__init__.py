"""Persistence collaborators for DSTest."""
