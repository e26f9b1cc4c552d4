"""Export and import groups of subnets spread across availability zones."""

__version__ = "0.1.0"
