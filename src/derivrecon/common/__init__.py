"""Shared components for the reconciliation engine."""
