"""
Certificate endpoints.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Certificate, utcnow
from app.models.schemas import (
    AuthUser,
    CertificateCreate,
    CertificateEnvelope,
    CertificateListEnvelope,
    CertificateResponse,
    CertificateUpdate,
    Envelope,
)
from app.services.content import apply_changes, get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()

_CLEARABLE = ("expiry_date", "credential_id", "credential_url", "description", "image")


@router.get("", response_model=CertificateListEnvelope)
async def list_certificates(db: AsyncSession = Depends(get_db)) -> CertificateListEnvelope:
    result = await db.execute(
        select(Certificate).order_by(Certificate.issue_date.desc(), Certificate.order.asc())
    )
    return CertificateListEnvelope(
        certificates=[CertificateResponse.model_validate(c) for c in result.scalars().all()]
    )


@router.post("", response_model=CertificateEnvelope, status_code=status.HTTP_201_CREATED)
async def create_certificate(
    body: CertificateCreate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> CertificateEnvelope:
    data = body.model_dump()
    data["issue_date"] = data["issue_date"] or utcnow()

    certificate = Certificate(**data)
    db.add(certificate)
    await db.flush()
    await db.refresh(certificate)

    logger.info("Created certificate id=%s %r from %r", certificate.id, certificate.name, certificate.issuer)
    return CertificateEnvelope(certificate=CertificateResponse.model_validate(certificate))


@router.put("/{certificate_id}", response_model=CertificateEnvelope)
async def update_certificate(
    certificate_id: str,
    body: CertificateUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> CertificateEnvelope:
    certificate = await get_or_404(db, Certificate, certificate_id, "Certificate")
    apply_changes(certificate, body.model_dump(exclude_unset=True), nullable=_CLEARABLE)
    await db.flush()
    await db.refresh(certificate)

    logger.info("Updated certificate id=%s", certificate.id)
    return CertificateEnvelope(certificate=CertificateResponse.model_validate(certificate))


@router.delete("/{certificate_id}", response_model=Envelope)
async def delete_certificate(
    certificate_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    certificate = await get_or_404(db, Certificate, certificate_id, "Certificate")
    await db.delete(certificate)
    await db.flush()

    logger.info("Deleted certificate id=%s", certificate.id)
    return Envelope(message="Certificate deleted successfully")
