"""Routing — exact-path route tables for buffered and direct handlers.

Tables are filled during setup and frozen when the dispatcher starts
serving.
"""
