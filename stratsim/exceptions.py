"""
Exception taxonomy for the simulation engine.

Local components raise UnknownVariable / InvalidInput for rejected input.
The Analysis Provider path raises ProviderUnavailable (transport) and
MalformedAnalysisResponse (schema mismatch). None of these are swallowed.
"""

from typing import Optional, Dict, Any


class StratSimError(Exception):
    """Base exception for all simulation engine errors."""
    def __init__(self, message: str, code: str = "STRATSIM_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class UnknownVariable(StratSimError):
    """Raised when an input references a variable id with no definition."""
    def __init__(self, variable_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Unknown variable '{variable_id}'", "UNKNOWN_VARIABLE", details)
        self.variable_id = variable_id


class InvalidInput(StratSimError):
    """Raised for degenerate or out-of-domain numeric input."""
    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_INPUT", details)
        self.field = field


class ProviderUnavailable(StratSimError):
    """Raised when the Analysis Provider call fails in transport."""
    def __init__(self, message: str, attempts: int = 1, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PROVIDER_UNAVAILABLE", details)
        self.attempts = attempts


class MalformedAnalysisResponse(StratSimError):
    """Raised when the Analysis Provider returns structurally invalid data."""
    def __init__(self, message: str, errors: Optional[list] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "MALFORMED_ANALYSIS_RESPONSE", details)
        self.errors = errors or []


class AnalysisAbandoned(StratSimError):
    """Raised when a simulation response arrives after its run was abandoned."""
    def __init__(self, run_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Simulation run '{run_id}' was abandoned", "ANALYSIS_ABANDONED", details)
        self.run_id = run_id


class ScenarioNotFound(StratSimError):
    """Raised when a saved scenario id is not in the store."""
    def __init__(self, scenario_id: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Scenario with id '{scenario_id}' not found", "NOT_FOUND", details)
        self.scenario_id = scenario_id
