"""
Schemas Module
Request and response models
"""
