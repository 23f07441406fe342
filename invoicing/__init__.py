"""Invoicing dashboard backend: SQLite data access, JSON API and maintenance scripts."""
