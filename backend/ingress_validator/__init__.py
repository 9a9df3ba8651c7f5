"""Validation of eskip annotations on ingress resources."""

__version__ = "1.0.0"
