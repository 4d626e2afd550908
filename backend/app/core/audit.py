"""
Audit logging for invoice and chat events.

Every generated, exported or emailed invoice leaves a JSON line on the
"audit" logger so a finance reviewer can reconstruct what left the system.

Never log email bodies, message text, or API keys here.
"""
import logging
import json
from datetime import datetime, timezone
from typing import Any, Optional, Dict

# Separate logger for audit events (can be shipped to centralized logging)
audit_logger = logging.getLogger("audit")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AuditLog:
    """Central audit logging for business events."""

    @staticmethod
    def log_invoice_event(
        action: str,  # "generated", "exported", "emailed"
        invoice_number: str,
        country: str,
        total: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Log an invoice lifecycle event.

        Usage:
            AuditLog.log_invoice_event("generated", "SKV-AE-202501-0042", "AE", total=1050)
            AuditLog.log_invoice_event("emailed", "SKV-AE-202501-0042", "AE", details={"recipient": "a@b.co"})
        """
        log_entry = {
            "timestamp": _now(),
            "event_type": f"invoice.{action}",
            "invoice_number": invoice_number,
            "country": country,
        }

        if total is not None:
            log_entry["total"] = str(total)
        if details:
            log_entry["details"] = details

        audit_logger.info(json.dumps(log_entry, default=str))

    @staticmethod
    def log_validation_rejected(
        resource_type: str,  # "invoice", "email"
        errors: list,
        ip_address: str = "",
    ):
        """
        Log rejected input so repeated bad submissions are visible.

        Usage:
            AuditLog.log_validation_rejected("invoice", ["Client name is required"], "10.0.0.4")
        """
        log_entry = {
            "timestamp": _now(),
            "event_severity": "WARNING",
            "event_type": f"{resource_type}.rejected",
            "error_count": len(errors),
            "errors": errors,
            "ip_address": ip_address,
        }

        audit_logger.warning(json.dumps(log_entry))

    @staticmethod
    def log_chat_relay(
        country: str,
        source: str,  # "groq", "mock"
        ip_address: str = "",
        success: bool = True,
    ):
        """
        Log a chat relay without the message text.

        Usage:
            AuditLog.log_chat_relay("IN", "groq", "10.0.0.4")
        """
        log_entry = {
            "timestamp": _now(),
            "event_type": "chat.relay",
            "country": country,
            "source": source,
            "ip_address": ip_address,
            "success": success,
        }

        audit_logger.info(json.dumps(log_entry))
