"""
Preview subsystem: cache manager, renderers and fallback icons.
"""
