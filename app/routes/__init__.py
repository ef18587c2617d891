"""
HTTP blueprints
"""
