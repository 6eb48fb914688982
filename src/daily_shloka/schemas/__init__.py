"""Pydantic schemas for the Daily Shloka API."""
