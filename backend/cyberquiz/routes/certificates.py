"""Certificate issuance and public verification endpoints."""

import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquiz.database import get_session
from cyberquiz.auth import get_current_user
from cyberquiz.models import User
from cyberquiz.crud import (
    get_settings,
    get_username,
    save_certificate,
    find_latest_certificate,
    find_certificate_for_attempt,
    find_certificate_by_id,
)
from cyberquiz.exceptions import NotEligible, PersistenceUnavailable
from cyberquiz.grading import is_certificate_eligible, issue_certificate
from cyberquiz.mailer import send_certificate_email, verify_url_for
from cyberquiz.session_registry import QuizSessionRegistry, get_quiz_registry
from cyberquiz.schemas import CertificateRead, CertificateIssued

logger = logging.getLogger(__name__)
router = APIRouter(tags=["certificates"])


def _not_found() -> HTTPException:
    # Identical for unknown IDs and store failures.
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "code": "certificate_not_found",
            "message": "Certificate not found",
        },
    )


@router.post("/certificates/", response_model=CertificateIssued)
async def request_certificate(
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    quizzes: QuizSessionRegistry = Depends(get_quiz_registry),
):
    """Issue a certificate for the caller's last completed quiz.

    Depending on the ``certificate_policy`` setting an existing certificate
    for the same attempt (``per_attempt``) or for the same user
    (``per_user``) is returned instead of minting a new one.  The
    notification email is only requested after the certificate is saved.
    """
    outcome = quizzes.last_outcome(current_user.id)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "no_completed_quiz", "message": "No completed quiz"},
        )
    if not is_certificate_eligible(outcome.percentage):
        raise NotEligible()

    settings = await get_settings(db)
    if settings.certificate_policy == "per_user":
        existing = await find_latest_certificate(db, current_user.id)
    else:
        existing = await find_certificate_for_attempt(
            db, current_user.id, outcome.attempt_id
        )
    if existing:
        return CertificateIssued(
            certificate=CertificateRead.model_validate(existing),
            verify_url=verify_url_for(settings.verify_base_url, existing.certificate_id),
            reused=True,
        )

    username = await get_username(db, current_user.id)
    issued = issue_certificate(outcome, username, current_user.id)
    row = await save_certificate(db, issued)
    logger.info(
        "Certificate %s issued to user %s for quiz %s",
        row.certificate_id,
        current_user.id,
        outcome.attempt_id,
    )
    background_tasks.add_task(
        send_certificate_email,
        current_user.email,
        row,
        settings.verify_base_url,
        settings.site_name,
    )
    return CertificateIssued(
        certificate=CertificateRead.model_validate(row),
        verify_url=verify_url_for(settings.verify_base_url, row.certificate_id),
    )


@router.get("/certificates/latest", response_model=CertificateRead)
async def latest_certificate(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    certificate = await find_latest_certificate(db, current_user.id)
    if not certificate:
        raise _not_found()
    return CertificateRead.model_validate(certificate)


@router.get("/verify/{certificate_id}", response_model=CertificateRead)
async def verify_certificate(
    certificate_id: str, db: AsyncSession = Depends(get_session)
):
    """Public, unauthenticated certificate lookup."""
    try:
        certificate = await find_certificate_by_id(db, certificate_id.strip().upper())
    except PersistenceUnavailable as exc:
        logger.error(
            "Certificate store unavailable while verifying %s: %s",
            certificate_id,
            exc.__cause__,
        )
        raise _not_found()
    if certificate is None:
        logger.info("Verification requested for unknown certificate %s", certificate_id)
        raise _not_found()
    return CertificateRead.model_validate(certificate)
