"""
API Module
HTTP surface
"""
