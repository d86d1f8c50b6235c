"""
API routers grouped by report area.
"""
