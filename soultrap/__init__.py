# soultrap/__init__.py
"""
Soul trap package: capture the soul of a defeated entity into the best soul
gem its collector owns.
"""

from soultrap.capture import capture_soul

__version__ = "1.0.0"

__all__ = ["capture_soul", "__version__"]
