"""Helpers for testing code built on snowtree."""
