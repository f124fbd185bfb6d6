"""Shared utilities for Lunara."""
