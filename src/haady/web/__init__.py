"""Haady web API."""
