"""SlimPath: calorie targets and weekly progress analytics for weight-loss plans."""

__version__ = "0.1.0"
