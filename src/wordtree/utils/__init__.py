"""Utility helpers for wordtree."""
