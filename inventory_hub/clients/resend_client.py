"""
Resend email client — delivery of critical sync alert emails.
"""
import logging
from typing import Optional

import resend

logger = logging.getLogger("resend_client")


class ResendClient:
    """Thin synchronous wrapper around the Resend SDK."""

    def __init__(self, api_key: str, from_address: str):
        resend.api_key = api_key
        self._from_address = from_address
        logger.info("ResendClient initialised from=%s", from_address)

    def send_email(
        self,
        to: list[str],
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
    ) -> Optional[str]:
        """
        Send one email to all recipients.

        Returns:
            Resend message id, or None when the API response carries none.
        """
        params: resend.Emails.SendParams = {
            "from": self._from_address,
            "to": to,
            "subject": subject,
            "html": html_body,
        }
        if text_body:
            params["text"] = text_body

        response = resend.Emails.send(params)
        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        logger.info("alert email sent to=%s id=%s", to, message_id)
        return message_id
