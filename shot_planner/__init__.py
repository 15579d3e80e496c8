"""shot-planner — four-act story to storyboard shot breakdown."""

__version__ = "0.1.0"
