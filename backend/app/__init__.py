"""Lifeclock backend application package."""
