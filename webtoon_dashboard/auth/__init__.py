"""Access control for the image tools."""

from .password_gate import PasswordGate

__all__ = ["PasswordGate"]
