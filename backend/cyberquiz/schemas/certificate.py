"""Schemas for issued certificates and public verification."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class CertificateRead(BaseModel):
    """Public certificate fields; the owner's user id is never exposed."""

    certificate_id: str
    username: str
    score: int
    total_questions: int
    percentage: int
    difficulty: str
    issued_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CertificateIssued(BaseModel):
    certificate: CertificateRead
    verify_url: str
    reused: bool = False
