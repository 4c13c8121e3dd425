"""Packaged data files for resourcefetcher."""
