"""
API Routes Module
All API route handlers
"""

from sealed_otp.api.routes import (
    health_routes,
    otp_routes,
    static_routes
)

__all__ = [
    "health_routes",
    "otp_routes",
    "static_routes"
]
