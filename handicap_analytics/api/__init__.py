"""Stateless FastAPI adapter over the analytics core."""
