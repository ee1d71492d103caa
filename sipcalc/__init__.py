"""Projection engine and local API for systematic investment plans."""
