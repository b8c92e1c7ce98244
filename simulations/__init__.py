"""
Runnable tutorial flows.
"""
