"""Core primitives: time model and error taxonomy"""
