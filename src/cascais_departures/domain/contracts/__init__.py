"""Contracts (protocols) for internal collaborators."""
