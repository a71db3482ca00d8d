"""wlsdomain — effective configuration resolution for WebLogic domain resources."""

__version__ = "0.1.0"
