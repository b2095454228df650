"""Pydantic models for application configuration settings."""

from typing import Literal
from pydantic import BaseModel

CertificatePolicy = Literal["per_attempt", "per_user"]


class SettingsRead(BaseModel):
    site_name: str
    certificate_policy: CertificatePolicy
    verify_base_url: str
    public_registration_disabled: bool


class SettingsUpdate(BaseModel):
    site_name: str | None = None
    certificate_policy: CertificatePolicy | None = None
    verify_base_url: str | None = None
    public_registration_disabled: bool | None = None
