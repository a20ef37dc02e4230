"""
Recipes API HTTP Layer
Routers and endpoint handlers
"""
