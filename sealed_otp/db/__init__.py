"""
Storage Module
In-memory repositories
"""
