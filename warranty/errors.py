"""Exceptions raised around the warranty-days engine."""


class WarrantyError(Exception):
    """Base class for warranty-days errors."""


class VehicleNotFoundError(WarrantyError, LookupError):
    """No vehicle file or no repair orders for the requested VIN."""


class InvalidDateError(WarrantyError, ValueError):
    """A date value could not be parsed into a calendar date."""


class ConfigError(WarrantyError):
    """Configuration from the environment is invalid."""


class InvalidVehicleFileError(WarrantyError, ValueError):
    """A vehicle file is missing fields a repair order needs."""
