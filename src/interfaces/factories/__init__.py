"""Factories wiring infrastructure into the application layer."""
