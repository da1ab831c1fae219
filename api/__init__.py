"""
api — HTTP layer: routes, dependencies, middleware.
"""
