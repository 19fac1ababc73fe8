"""Exception hierarchy for the claim triage service."""


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

class APIClientError(AppError):
    """Raised when an external API call fails."""
    pass

class APITimeoutError(APIClientError):
    """Raised when an external API call times out."""
    pass

class ValidationError(AppError):
    """Raised when input validation fails."""
    pass

class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass

class ClassifierError(AppError):
    """Raised when the disaster classifier cannot produce a usable assessment.

    Fatal to the current submission: nothing is recorded in the ledger.
    """
    pass

class PolicyNotFoundError(AppError):
    """Raised when a claim references a policy that does not exist."""
    def __init__(self, policy_id: str = None, message: str = None):
        super().__init__(message or f"Policy not found: {policy_id}")
        self.policy_id = policy_id
