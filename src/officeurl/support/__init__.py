"""
Helpers shared by the value objects in this package.
"""
