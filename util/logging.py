"""
Structured operation logging for the admin console.
Record, modal and validation events are written as single structured lines.
"""

import logging
import os
from typing import Any, Dict, List

class StructuredLogger:
    """Structured logger for record store, modal and validation operations."""

    def __init__(self, name: str = "eggs_admin"):
        self.logger = logging.getLogger(name)
        level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
        self.logger.setLevel(level if isinstance(level, int) else logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_record_operation(self, domain: str, operation: str, record_id: str, payload: Dict[str, Any] = None, status: str = "success"):
        """Log a record store mutation. Payload values are sanitized first."""
        details = {"record_id": record_id}
        if payload is not None:
            details["payload"] = sanitize_payload(payload)

        self.log_operation(f"{domain}.{operation}", status, details)

    def log_modal_transition(self, domain: str, modal: str, state: str, record_id: str = None):
        """Log a modal opening or closing."""
        details = {"modal": modal}
        if record_id is not None:
            details["record_id"] = record_id

        self.log_operation(f"{domain}.modal", state, details)

    def log_validation_failure(self, domain: str, field: str, reason: str):
        """Log a rejected create form. Only the field name is logged, never its value."""
        self.log_operation(f"{domain}.validation", "rejected", {"field": field, "reason": reason[:100]})

    def log_stale_reference(self, domain: str, action: str, reference: Any):
        """Log an action that referenced a record which no longer exists."""
        self.log_operation(f"{domain}.{action}", "ignored", {"reference": reference}, level=logging.WARNING)

    def info(self, message: str) -> None:
        """Log info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()

# Payload sanitization utility
def sanitize_payload(payload: Any, reveal_sensitive: bool = False, sensitive_fields: List[str] = None) -> Any:
    """Sanitize payloads for operation logging."""
    if sensitive_fields is None:
        sensitive_fields = ['phone', 'notes', 'password', 'secret']

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if reveal_sensitive or k not in sensitive_fields:
                sanitized[k] = sanitize_payload(v, reveal_sensitive, sensitive_fields)
            else:
                sanitized[k] = "[REDACTED]"
        return sanitized
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, reveal_sensitive, sensitive_fields) for item in payload]
    else:
        return payload
