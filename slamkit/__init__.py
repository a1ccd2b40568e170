"""Visual SLAM building blocks: pose conversions, two-view geometry, sequence loaders and planes."""

__version__ = "0.1.0"