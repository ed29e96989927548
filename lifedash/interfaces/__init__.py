"""Interfaces to the application services: HTTP API and CLI."""
