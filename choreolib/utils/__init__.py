"""Shared helpers for choreolib."""
