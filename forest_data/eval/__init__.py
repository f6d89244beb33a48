"""Reporting helpers for loaded datasets."""
