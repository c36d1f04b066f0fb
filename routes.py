"""
Unified Routes Module

Collects the route setup functions from the api/ directory so main.py can
import them from one place.
"""
from api.routes_clock import setup_clock_routes
from api.routes_system import setup_system_routes

__all__ = ['setup_clock_routes', 'setup_system_routes']
