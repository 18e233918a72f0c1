# collabhub/core/startup/__init__.py
"""Startup phases run by collabhub.core.lifespan"""
