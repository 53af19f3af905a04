"""Exceptions raised by the fuel tracker."""


class FuelTrackerError(ValueError):
    """Base class for fuel tracker errors."""


class DataImportError(FuelTrackerError):
    """An import document could not be parsed or has the wrong shape."""
