"""
Alert service — emails operators about critical sync failures.

Alerting is best effort: a missing configuration or a Resend failure is
logged and reported in the returned SendEmailResult, never raised, so a
broken mail setup cannot fail an inventory sync run.
"""
import asyncio
import logging
from typing import Optional

from inventory_hub.clients.resend_client import ResendClient
from inventory_hub.core.config import Settings
from inventory_hub.schemas.inventory_sync import CriticalSyncError, SendEmailResult
from inventory_hub.utils.email_templates import build_sync_failure_email

logger = logging.getLogger("alert_service")


class AlertService:
    def __init__(self, settings: Settings, resend_client: Optional[ResendClient] = None):
        self._settings = settings
        self._recipients = settings.alert_recipients
        self._resend = resend_client
        if self._resend is None and settings.resend_api_key:
            self._resend = ResendClient(settings.resend_api_key, settings.alert_email_from)

    def is_configured(self) -> bool:
        return self._resend is not None and bool(self._recipients)

    async def send_alert(self, subject: str, html: str, text: str) -> SendEmailResult:
        if self._resend is None:
            logger.warning("resend api key not configured, alert not sent subject=%s", subject)
            return SendEmailResult(success=False, error="Email service not configured (missing RESEND_API_KEY)")

        if not self._recipients:
            logger.warning("no alert recipients configured, alert not sent subject=%s", subject)
            return SendEmailResult(success=False, error="No recipient address configured (missing ALERT_EMAIL_TO)")

        try:
            message_id = await asyncio.to_thread(
                self._resend.send_email, self._recipients, subject, html, text
            )
        except Exception as e:
            logger.error("alert email failed subject=%s error=%s", subject, e)
            return SendEmailResult(success=False, error=str(e))

        return SendEmailResult(success=True, message_id=message_id)

    async def send_critical_failure_alert(self, error: CriticalSyncError) -> SendEmailResult:
        """Render and send the alert for one critical failure."""
        if not self.is_configured():
            logger.warning(
                "alerting not configured, skipping alert type=%s shop=%s",
                error.type.value, error.partner_shop,
            )
            return SendEmailResult(success=False, error="Email alerting not configured")

        subject, html, text = build_sync_failure_email(error, self._settings.app_url)
        result = await self.send_alert(subject, html, text)
        if result.success:
            logger.info("critical alert sent type=%s shop=%s id=%s", error.type.value, error.partner_shop, result.message_id)
        else:
            logger.error("critical alert not delivered type=%s shop=%s error=%s", error.type.value, error.partner_shop, result.error)
        return result
