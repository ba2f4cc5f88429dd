"""Persistence layer for the student records API."""
