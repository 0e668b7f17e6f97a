"""tdcalc — elapsed time and duration calculator."""

__version__ = "0.1.0"
