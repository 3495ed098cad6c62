"""Command-line entry points for caiyun-weather."""
