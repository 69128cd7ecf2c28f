from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Nurse Platform Mail"
    debug: bool = False
    admin_api_key: str = ""

    # CORS: comma-separated allowed origins (empty = allow all for dev)
    cors_origins: str = ""

    # Base URL of the patient/nurse web app, used to build links in emails
    frontend_url: str = ""

    # Outbound mail: smtp | resend | sendgrid
    mail_provider: str = "smtp"
    mail_host: str = ""
    mail_port: int = 587
    mail_user: str = ""
    mail_password: str = ""
    mail_use_tls: bool = True
    mail_from: Optional[str] = None
    mail_sender_name: str = "Nurse Platform"

    resend_api_key: str = ""
    sendgrid_api_key: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def sender_address(self) -> str:
        return self.mail_from or self.mail_user


settings = Settings()
