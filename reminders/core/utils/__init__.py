"""Core utility helpers."""
