"""
FeedScout API application.
"""
