"""HTML bodies for the named email templates."""

import html as html_lib
from typing import Callable

EMAIL_VERIFICATION = "email-verification"
WELCOME = "welcome"


class TemplateNotFound(KeyError):
    """No template is registered under the requested name."""


def _layout(heading: str, content: str, footer_name: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="margin:0;padding:0;background:#f4f7f9;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Helvetica,Arial,sans-serif;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background:#f4f7f9;padding:32px 0;">
    <tr><td align="center">
      <table width="600" cellpadding="0" cellspacing="0" style="background:#ffffff;border-radius:8px;overflow:hidden;box-shadow:0 2px 8px rgba(0,0,0,0.08);">
        <tr>
          <td style="background:#0f766e;padding:24px 32px;">
            <h1 style="margin:0;color:#ffffff;font-size:20px;font-weight:600;">{heading}</h1>
          </td>
        </tr>
        <tr>
          <td style="padding:24px 32px;color:#333;font-size:15px;line-height:1.6;">
            {content}
          </td>
        </tr>
        <tr>
          <td style="padding:16px 32px;background:#fafafa;border-top:1px solid #eee;">
            <p style="margin:0;color:#999;font-size:12px;">Sent by {footer_name}</p>
          </td>
        </tr>
      </table>
    </td></tr>
  </table>
</body>
</html>"""


def _button(href: str, label: str) -> str:
    return (
        f'<p style="margin:24px 0;"><a href="{href}" '
        f'style="display:inline-block;padding:12px 24px;background:#0f766e;color:#fff;'
        f'text-decoration:none;border-radius:5px;font-size:15px;">{label}</a></p>'
    )


def _render_email_verification(context: dict[str, str]) -> str:
    escape = html_lib.escape
    name = escape(context.get("name", ""))
    email = escape(context.get("email", ""))
    url = escape(context.get("verificationUrl", ""))

    content = (
        f'<p style="margin:0 0 16px;">Hi {name},</p>'
        f'<p style="margin:0 0 16px;">Thanks for signing up to Nurse Platform with '
        f"<strong>{email}</strong>. Please confirm your email address to activate "
        f"your account.</p>"
        f"{_button(url, 'Verify Email')}"
        f'<p style="margin:0 0 8px;color:#666;font-size:13px;">If the button does not work, '
        f"copy this link into your browser:</p>"
        f'<p style="margin:0;color:#666;font-size:13px;word-break:break-all;">{url}</p>'
    )
    return _layout("Verify your email", content, "Nurse Platform")


def _render_welcome(context: dict[str, str]) -> str:
    escape = html_lib.escape
    name = escape(context.get("name", ""))
    frontend_url = escape(context.get("frontendUrl", ""))

    content = (
        f'<p style="margin:0 0 16px;">Hi {name},</p>'
        f'<p style="margin:0 0 16px;">Welcome to Nurse Platform! Your account is ready. '
        f"Patients can request home care visits and nurses can manage their profile "
        f"and incoming requests from the dashboard.</p>"
        f"{_button(f'{frontend_url}/dashboard', 'Go to Dashboard')}"
    )
    return _layout("Welcome to Nurse Platform", content, "Nurse Platform")


_TEMPLATES: dict[str, Callable[[dict[str, str]], str]] = {
    EMAIL_VERIFICATION: _render_email_verification,
    WELCOME: _render_welcome,
}


def render_template(name: str, context: dict[str, str]) -> str:
    """Render the named template to an HTML body. Context values are escaped."""
    try:
        renderer = _TEMPLATES[name]
    except KeyError:
        raise TemplateNotFound(name) from None
    return renderer(context)
