"""
Haady - profile onboarding service.

Resolves where a user belongs in the onboarding flow and exposes the
preference steps (traits, brands, colors) over a Supabase-backed API.
"""

__version__ = "0.1.0"
