"""
Custom exceptions for the environment provider resolver.

This module defines the hierarchy of exceptions raised while resolving an
environment into its provider descriptors. Every fatal kind aborts the whole
resolution; callers only see a single failure whose message identifies the
environment or provider at fault.

Exception Hierarchy:
    ResolutionError (base)
    ├── InvalidInputError - Empty or malformed action input
    ├── EnvironmentNotFoundError - Environment entity absent from the catalog
    ├── CatalogError - Catalog request failed (transport or HTTP error)
    ├── MissingConfigurationError - Required provider field empty before credentials
    ├── CredentialFailureError - Credential broker failed or denied access
    └── ParameterResolutionError - Parameter store lookup failed
"""

from typing import Optional


class ResolutionError(Exception):
    """
    Base exception for all resolution errors.

    Attributes:
        message: Human-readable error description
        provider: Optional provider name where the error occurred
        path: Optional parameter store path involved in the error
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        path: Optional[str] = None
    ):
        self.message = message
        self.provider = provider
        self.path = path

        # Build detailed message with context
        details = []
        if provider:
            details.append(f"provider={provider}")
        if path:
            details.append(f"path={path}")

        if details:
            full_message = f"{message} [{', '.join(details)}]"
        else:
            full_message = message

        super().__init__(full_message)


class InvalidInputError(ResolutionError):
    """Raised when the action input is missing or empty."""


class EnvironmentNotFoundError(ResolutionError):
    """
    Raised when the environment entity cannot be located in the catalog.

    Nothing has been resolved at this point, so no partial output exists.

    Example:
        >>> resolver.resolve(context)
        EnvironmentNotFoundError: The environment entity "awsenvironment:missing"
        could not be located in the catalog.
    """

    def __init__(self, environment_ref: str):
        self.environment_ref = environment_ref
        super().__init__(
            f'The environment entity "{environment_ref}" could not be located in the catalog.'
        )


class CatalogError(ResolutionError):
    """
    Raised when a catalog request fails for a reason other than "not found".

    Attributes:
        status_code: HTTP status returned by the catalog, if any
        original_error: The underlying transport exception, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        self.status_code = status_code
        self.original_error = original_error
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(message)


class MissingConfigurationError(ResolutionError):
    """
    Raised when a provider lacks a field needed before requesting credentials.

    The check runs before any network call so that a provider which cannot
    succeed never costs a credential round trip.

    Attributes:
        provider_name: Provider whose configuration is incomplete
        field_name: Name of the empty field (e.g. "accountId")
    """

    def __init__(self, provider_name: str, field_name: str):
        self.provider_name = provider_name
        self.field_name = field_name
        message = (
            f"{field_name} not configured for environment provider: {provider_name}. "
            f"The provider IaC deployment may have failed."
        )
        super().__init__(message)


class CredentialFailureError(ResolutionError):
    """
    Raised when scoped credentials cannot be obtained for a provider.

    Attributes:
        provider_name: Provider the credentials were requested for
        original_error: The underlying broker exception
    """

    def __init__(self, provider_name: str, original_error: Optional[Exception] = None):
        self.provider_name = provider_name
        self.original_error = original_error

        message = f"Failed to obtain credentials for environment provider {provider_name}"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message, provider=provider_name)


class ParameterResolutionError(ResolutionError):
    """
    Raised when a parameter store value cannot be resolved for a provider.

    Attributes:
        provider_name: Provider being populated
        parameter_path: Parameter store path that failed
        original_error: The underlying store exception
    """

    def __init__(
        self,
        provider_name: str,
        parameter_path: str,
        original_error: Optional[Exception] = None
    ):
        self.provider_name = provider_name
        self.parameter_path = parameter_path
        self.original_error = original_error

        message = f"Failed to populate environment provider {provider_name}."
        if original_error:
            message += f" {str(original_error)}"

        super().__init__(message, provider=provider_name, path=parameter_path)
