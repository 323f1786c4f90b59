"""rack-planner: rack-unit allocation for equipment racks."""

__version__ = "0.1.0"
