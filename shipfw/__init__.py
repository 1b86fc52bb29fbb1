"""shipfw: publish Flutter iOS framework releases to a code push service."""

__version__ = "0.3.0"
