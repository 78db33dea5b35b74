"""Routers for the booktracker API."""
