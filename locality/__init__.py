"""Plain and blocked 2D arrays, PPM reading, writing and transforms, and CPU timing."""

__version__ = "0.1.0"