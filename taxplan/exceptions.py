"""Custom exceptions for taxplan."""

from pathlib import Path


class TaxComputationError(Exception):
    """Base exception for tax computation errors."""


class ConfigurationError(TaxComputationError):
    """Raised when reference tax data is missing or malformed. Always fatal."""


class UnsupportedTaxYearError(ConfigurationError):
    """Raised when no reference table exists for a tax year."""

    def __init__(self, tax_year: int, jurisdiction: str):
        self.tax_year = tax_year
        self.jurisdiction = jurisdiction
        super().__init__(f"No {jurisdiction} tax table for tax year {tax_year}")


class BracketTableError(ConfigurationError):
    """Raised when a bracket table is not a contiguous ladder covering [0, inf)."""

    def __init__(self, message: str):
        super().__init__(f"Malformed bracket table: {message}")


class DataValidationError(TaxComputationError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class InputFileError(TaxComputationError):
    """Raised when a household input file cannot be read."""

    def __init__(self, file_path: Path | str, message: str):
        self.file_path = str(file_path)
        super().__init__(f"Input error for {file_path}: {message}")
