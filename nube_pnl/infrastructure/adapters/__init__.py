"""Marketplace adapters."""
