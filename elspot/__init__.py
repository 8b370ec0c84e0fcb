"""elspot - exact, DST-aware normalization of Nord Pool day-ahead prices."""

__version__ = "0.1.0"
