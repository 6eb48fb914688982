"""Operational scripts for seeding and migrating the database."""
