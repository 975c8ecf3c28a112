"""Certificate Route — DB row + CertificateNFT.issueCertificate."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import get_settings
from portal.infrastructure.chain_client import ChainClient, get_chain
from portal.infrastructure.database import get_db
from portal.schemas.actions import CertificateRequest
from portal.services.handle_certificates import CertificateHandlers

router = APIRouter(prefix="/api/v1/certificates", tags=["certificates"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def issue_certificate(
    body: CertificateRequest,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    """Issue a certificate for a course whose end date has passed."""
    certificate, receipt = await CertificateHandlers(
        db, chain, get_settings(),
    ).issue_certificate(body)
    return {
        "success": True,
        "certificate": {
            "certificate_id": certificate.certificate_id,
            "user_id": certificate.user_id,
            "course_id": certificate.course_id,
            "nft_certificate_uri": certificate.nft_certificate_uri,
            "token_id": certificate.token_id,
            "issued_date": certificate.issued_date.isoformat(),
            "transaction_hash": certificate.transaction_hash,
        },
        "receipt": receipt.to_response(),
    }
