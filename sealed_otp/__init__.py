"""
Sealed Letter OTP
Telegram-delivered one-time passcodes for the web front end
"""

__version__ = "1.0.0"
