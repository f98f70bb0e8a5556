"""Rule sets, thinning rule sets, binary decision DRAGs and their reduction and compression."""

__version__ = "0.1.0"