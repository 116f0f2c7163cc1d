"""Formats and sends the weekly insights e-mail over SMTP."""
import logging
import smtplib
from email.message import EmailMessage
from html import escape

from app.core.config import settings
from app.core.exceptions import ReportConfigurationError, ReportDeliveryError
from app.models.schemas import ReportRequest

logger = logging.getLogger(__name__)


def _short_date(value) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def period_label(payload: ReportRequest) -> str:
    if payload.range and payload.range.start and payload.range.end:
        return f"{_short_date(payload.range.start)} - {_short_date(payload.range.end)}"
    return "Weekly summary"


def build_text_body(payload: ReportRequest) -> str:
    lines = [payload.summary or "Weekly summary unavailable."]
    if payload.recommendations:
        lines.append("\nRecommendations:")
        for rec in payload.recommendations:
            lines.append(f"- {rec.title}: {rec.description}")
    if payload.anomalies:
        lines.append("\nAlerts:")
        for alert in payload.anomalies:
            lines.append(f"- {alert.metric} ({alert.type}): {alert.message}")
    return "\n".join(lines)


def build_html_body(payload: ReportRequest) -> str:
    summary_lines = "".join(
        f"<li>{escape(line)}</li>" for line in (payload.summary or "").split("\n") if line
    )

    recommendation_items = "".join(
        f"<li><strong>{escape(rec.title)}</strong><br/>"
        f"<small>{escape(rec.priority.upper() + (' · ' + rec.category if rec.category else ''))}</small><br/>"
        f"{escape(rec.description)}</li>"
        for rec in payload.recommendations
    )

    anomaly_items = "".join(
        f"<li><strong>{escape(alert.metric)}</strong> · {escape(alert.type)}<br/>"
        f"{escape(alert.message)}<br/>"
        f"<small>{escape(alert.date.strftime('%m/%d/%Y, %I:%M:%S %p'))}</small></li>"
        for alert in payload.anomalies
    )

    sections = []
    if summary_lines:
        sections.append(f'<h2 style="margin-top: 1.5rem;">Snapshot</h2><ul>{summary_lines}</ul>')
    if recommendation_items:
        sections.append(f'<h2 style="margin-top: 1.5rem;">Recommendations</h2><ul>{recommendation_items}</ul>')
    if anomaly_items:
        sections.append(f'<h2 style="margin-top: 1.5rem;">Alerts to review</h2><ul>{anomaly_items}</ul>')

    body = "".join(sections)
    return f"""
    <div style="font-family: 'Helvetica Neue', Arial, sans-serif; color: #0f172a;">
      <h1 style="margin-bottom: 0.5rem;">Your HealthTrackr Weekly Report</h1>
      <p style="margin-top: 0; color: #475569;">Here is your summary for the past week.</p>
      {body}
      <p style="margin-top: 2rem; font-size: 0.875rem; color: #64748b;">
        Stay consistent and keep logging your metrics for richer insights.
      </p>
    </div>
    """


def build_message(payload: ReportRequest, sender: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = f"HealthTrackr Reports <{sender}>"
    message["To"] = payload.to
    message["Subject"] = f"HealthTrackr weekly insights ({period_label(payload)})"
    message.set_content(build_text_body(payload))
    message.add_alternative(build_html_body(payload), subtype="html")
    return message


def send_report(payload: ReportRequest) -> None:
    user = settings.GMAIL_SMTP_USER
    password = settings.GMAIL_SMTP_PASS
    if not user or not password:
        raise ReportConfigurationError(
            "Missing Gmail SMTP credentials. Set GMAIL_SMTP_USER and GMAIL_SMTP_PASS."
        )

    message = build_message(payload, user)
    try:
        with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT) as smtp:
            smtp.login(user, password)
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        raise ReportDeliveryError(str(exc)) from exc

    logger.info("Weekly report sent to %s", payload.to)
