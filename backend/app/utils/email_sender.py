"""
Email sending utility with pluggable backends.
Default 'console' backend logs verification codes for dev/testing.
"""
import os
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from abc import ABC, abstractmethod

from app.models.verification_code import CODE_TTL_MINUTES

logger = logging.getLogger(__name__)

_PURPOSE = {
    'register': '注册账号',
    'reset': '重置密码',
}


class EmailBackend(ABC):
    """Abstract base class for email backends."""

    @abstractmethod
    def send(self, to_email, subject, body_text, body_html=None):
        """Send an email."""
        pass


class ConsoleBackend(EmailBackend):
    """Console backend that logs emails instead of sending them."""

    def send(self, to_email, subject, body_text, body_html=None):
        logger.info("[EMAIL] To: %s | Subject: %s\n%s", to_email, subject, body_text)


class SMTPBackend(EmailBackend):
    """SMTP backend with TLS support."""

    def __init__(self):
        self.host = os.getenv('SMTP_HOST')
        self.port = int(os.getenv('SMTP_PORT', '587'))
        self.user = os.getenv('SMTP_USER')
        self.password = os.getenv('SMTP_PASS')
        self.from_email = os.getenv('SMTP_FROM_EMAIL', self.user)
        self.use_tls = os.getenv('SMTP_USE_TLS', 'true').lower() == 'true'

        if not all([self.host, self.user, self.password]):
            raise ValueError(
                "SMTP backend requires SMTP_HOST, SMTP_USER, and SMTP_PASS environment variables"
            )

    def send(self, to_email, subject, body_text, body_html=None):
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = self.from_email
        msg['To'] = to_email

        msg.attach(MIMEText(body_text, 'plain', 'utf-8'))
        if body_html:
            msg.attach(MIMEText(body_html, 'html', 'utf-8'))

        try:
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.user, self.password)
                server.sendmail(self.from_email, to_email, msg.as_string())
            logger.info("Email sent via SMTP to %s", to_email)
        except smtplib.SMTPException as e:
            logger.error("SMTP error sending email to %s: %s", to_email, str(e))
            raise


def get_email_backend(name=None):
    """Get the configured email backend instance."""
    backend_name = (name or os.getenv('EMAIL_BACKEND', 'console')).lower()

    if backend_name == 'console':
        return ConsoleBackend()
    elif backend_name == 'smtp':
        return SMTPBackend()
    else:
        raise ValueError(f"Unknown EMAIL_BACKEND: {backend_name}")


class EmailCodeSender:
    """Formats verification-code emails and hands them to a backend."""

    def __init__(self, backend: EmailBackend):
        self.backend = backend

    def __call__(self, type_, to_email, code):
        purpose = _PURPOSE.get(type_, '身份验证')
        subject = f"TriGuard {purpose}验证码"
        body_text = (
            f"您正在{purpose}，验证码为：{code}\n\n"
            f"验证码{CODE_TTL_MINUTES}分钟内有效，请勿泄露给他人。\n\n"
            f"如果这不是您本人的操作，请忽略此邮件。"
        )
        body_html = f"""
        <html>
        <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2 style="color: #333;">{purpose}验证码</h2>
            <div style="background: #f5f5f5; padding: 20px; text-align: center; margin: 20px 0;">
                <span style="font-size: 32px; font-weight: bold; letter-spacing: 4px; color: #007bff;">{code}</span>
            </div>
            <p style="color: #666;">验证码{CODE_TTL_MINUTES}分钟内有效，请勿泄露给他人。</p>
            <p style="color: #999; font-size: 12px;">如果这不是您本人的操作，请忽略此邮件。</p>
        </body>
        </html>
        """
        self.backend.send(to_email, subject, body_text, body_html)
        logger.info("Verification code (%s) sent to %s", type_, to_email)
