from .guardian import SafetyGuardian, SafetyViolation

__all__ = ["SafetyGuardian", "SafetyViolation"]
