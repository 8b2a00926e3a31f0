"""
Email templates for critical inventory sync alerts.

build_sync_failure_email(error, app_url) returns (subject, html, text).
"""
import html
from datetime import datetime, timezone
from typing import Optional, Tuple

from inventory_hub.schemas.inventory_sync import CriticalErrorType, CriticalSyncError

SUBJECT_PREFIX = "[Alert]"

_TITLES = {
    CriticalErrorType.TOKEN_REVOKED: "Access Token Revoked",
    CriticalErrorType.STORE_UNREACHABLE: "Store Unreachable",
    CriticalErrorType.HIGH_FAILURE_RATE: "High Failure Rate",
    CriticalErrorType.CONSECUTIVE_FAILURES: "Consecutive Failures",
    CriticalErrorType.OWNER_STORE_DISCONNECTED: "Owner Store Disconnected",
}

_RECOMMENDED_ACTIONS = {
    CriticalErrorType.TOKEN_REVOKED: (
        "The partner needs to reinstall the app to grant a new access token. "
        "Contact them to request reinstallation."
    ),
    CriticalErrorType.STORE_UNREACHABLE: (
        "This may be a temporary issue with the partner's store or Shopify. "
        "If the problem persists, contact the partner."
    ),
    CriticalErrorType.HIGH_FAILURE_RATE: (
        "Review the error details below. This may indicate issues with specific "
        "products or the partner's inventory data."
    ),
    CriticalErrorType.CONSECUTIVE_FAILURES: (
        "Multiple consecutive sync attempts have failed. Review the partner's "
        "connection status in the admin dashboard."
    ),
    CriticalErrorType.OWNER_STORE_DISCONNECTED: (
        "Refresh the owner store token in the admin dashboard. If the issue persists, "
        "check the OWNER_CLIENT_ID and OWNER_CLIENT_SECRET environment variables."
    ),
}


def format_shop_name(shop: str) -> str:
    return shop.replace(".myshopify.com", "")


def email_subject(error: CriticalSyncError) -> str:
    shop = format_shop_name(error.partner_shop)
    if error.type == CriticalErrorType.TOKEN_REVOKED:
        return f"{SUBJECT_PREFIX} Partner Token Revoked: {shop}"
    if error.type == CriticalErrorType.STORE_UNREACHABLE:
        return f"{SUBJECT_PREFIX} Partner Store Unreachable: {shop}"
    if error.type == CriticalErrorType.HIGH_FAILURE_RATE:
        return f"{SUBJECT_PREFIX} High Sync Failure Rate: {shop}"
    if error.type == CriticalErrorType.CONSECUTIVE_FAILURES:
        return f"{SUBJECT_PREFIX} Consecutive Sync Failures: {shop}"
    if error.type == CriticalErrorType.OWNER_STORE_DISCONNECTED:
        return f"{SUBJECT_PREFIX} Owner Store Disconnected - Inventory Sync Halted"
    return f"{SUBJECT_PREFIX} Inventory Sync Failure"


def recommended_action(error: CriticalSyncError) -> str:
    return _RECOMMENDED_ACTIONS.get(
        error.type,
        "Review the error details and check the admin dashboard for more information.",
    )


def _percent(rate: float) -> str:
    return f"{round(rate * 100)}%"


def _build_html(error: CriticalSyncError, app_url: str, timestamp: str) -> str:
    title = _TITLES.get(error.type, "Unknown Error")
    shop = html.escape(format_shop_name(error.partner_shop))
    dashboard_url = f"{app_url}/admin/inventory-sync"
    partners_url = f"{app_url}/admin/partners"

    extra_rows = ""
    if error.consecutive_failures:
        extra_rows += f"""
      <tr>
        <td style="padding: 8px 0; color: #6b7280;">Consecutive Failures:</td>
        <td style="padding: 8px 0; color: #dc2626; font-weight: 500;">{error.consecutive_failures}</td>
      </tr>"""
    if error.failure_rate is not None:
        extra_rows += f"""
      <tr>
        <td style="padding: 8px 0; color: #6b7280;">Failure Rate:</td>
        <td style="padding: 8px 0; color: #dc2626; font-weight: 500;">{_percent(error.failure_rate)}</td>
      </tr>"""

    details_block = ""
    if error.details:
        details_block = f"""
  <div style="margin-bottom: 24px;">
    <h2 style="font-size: 16px; margin: 0 0 8px 0;">Error Details</h2>
    <div style="background: #f3f4f6; border-radius: 4px; padding: 12px; font-family: monospace; font-size: 13px; white-space: pre-wrap; word-break: break-word;">{html.escape(error.details)}</div>
  </div>"""

    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; color: #1a1a1a;">
  <div style="background: #fef2f2; border: 1px solid #fecaca; border-radius: 8px; padding: 16px; margin-bottom: 24px;">
    <h1 style="color: #dc2626; margin: 0 0 8px 0; font-size: 20px;">Inventory Sync Alert</h1>
    <p style="margin: 0; color: #991b1b; font-weight: 500;">{title}</p>
  </div>
  <div style="background: #f9fafb; border-radius: 8px; padding: 16px; margin-bottom: 24px;">
    <table style="width: 100%; border-collapse: collapse;">
      <tr>
        <td style="padding: 8px 0; color: #6b7280; width: 160px;">Partner:</td>
        <td style="padding: 8px 0; font-weight: 500;">{shop}</td>
      </tr>
      <tr>
        <td style="padding: 8px 0; color: #6b7280;">Error Type:</td>
        <td style="padding: 8px 0; font-weight: 500;">{title}</td>
      </tr>
      <tr>
        <td style="padding: 8px 0; color: #6b7280;">Time:</td>
        <td style="padding: 8px 0;">{timestamp}</td>
      </tr>{extra_rows}
    </table>
  </div>
  <div style="margin-bottom: 24px;">
    <h2 style="font-size: 16px; margin: 0 0 8px 0;">Message</h2>
    <p style="margin: 0; color: #374151;">{html.escape(error.message)}</p>
  </div>{details_block}
  <div style="background: #dbeafe; border-radius: 8px; padding: 16px; margin-bottom: 24px;">
    <h2 style="font-size: 16px; margin: 0 0 8px 0; color: #1e40af;">Recommended Action</h2>
    <p style="margin: 0; color: #1e40af;">{recommended_action(error)}</p>
  </div>
  <div style="text-align: center; padding: 16px 0; border-top: 1px solid #e5e7eb;">
    <a href="{dashboard_url}" style="display: inline-block; padding: 12px 24px; background: #1a1a1a; color: #ffffff; text-decoration: none; border-radius: 6px; margin-right: 8px;">View Sync Dashboard</a>
    <a href="{partners_url}" style="display: inline-block; padding: 12px 24px; background: #f3f4f6; color: #374151; text-decoration: none; border-radius: 6px;">View Partners</a>
  </div>
  <p style="text-align:center; font-size:11px; color:#999; margin-top:15px;">
    Automated alert from Inventory Hub
  </p>
</div>"""


def _build_text(error: CriticalSyncError, app_url: str, timestamp: str) -> str:
    lines = [
        "INVENTORY SYNC ALERT",
        "====================",
        "",
        f"Error Type: {_TITLES.get(error.type, 'Unknown Error')}",
        f"Partner: {format_shop_name(error.partner_shop)}",
        f"Time: {timestamp}",
    ]
    if error.consecutive_failures:
        lines.append(f"Consecutive Failures: {error.consecutive_failures}")
    if error.failure_rate is not None:
        lines.append(f"Failure Rate: {_percent(error.failure_rate)}")

    lines += ["", "MESSAGE", "-------", error.message]

    if error.details:
        lines += ["", "ERROR DETAILS", "-------------", error.details]

    lines += [
        "",
        "RECOMMENDED ACTION",
        "------------------",
        recommended_action(error),
        "",
        "LINKS",
        "-----",
        f"Sync Dashboard: {app_url}/admin/inventory-sync",
        f"Partners: {app_url}/admin/partners",
        "",
        "---",
        "Automated alert from Inventory Hub",
    ]
    return "\n".join(lines)


def build_sync_failure_email(
    error: CriticalSyncError,
    app_url: str,
    now: Optional[datetime] = None,
) -> Tuple[str, str, str]:
    """Build (subject, html, text) for a critical sync failure."""
    app_url = app_url.rstrip("/")
    timestamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M UTC")
    return (
        email_subject(error),
        _build_html(error, app_url, timestamp),
        _build_text(error, app_url, timestamp),
    )
