# exceptions.py

"""Custom exceptions for the cluster sizer."""

class SizingError(Exception):
    """Base exception for cluster sizing errors."""
    pass

class ConfigurationError(SizingError, ValueError):
    """Exception for invalid planning configuration or inputs."""

    def __init__(self, field, constraint, value=None):
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"Invalid {field}: must be {constraint} (got {value!r})")

class CapacityError(SizingError):
    """Exception for a resource with demand but no per-node capacity."""
    pass

class CatalogError(SizingError):
    """Exception for hardware profile catalog errors."""
    pass

class InventoryError(SizingError):
    """Exception for VM inventory errors."""
    pass
