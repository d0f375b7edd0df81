"""Helpers for admin account deletion workflows."""
