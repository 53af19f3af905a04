"""Personal fuel expense and CO2 emission tracker."""

__version__ = "2.0.0"
