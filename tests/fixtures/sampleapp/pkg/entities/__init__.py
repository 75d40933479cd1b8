"""Entities of the sample application."""
