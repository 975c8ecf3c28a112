"""Certificate Handlers — issue_certificate.

Invariants:
    - Requires identity token, an existing registration, and an ended course
    - At most one certificate per (user, course)
    - nft_certificate_uri is the metadata route for (user_id, course_id)
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import Settings
from portal.core.domain_types import ContractName
from portal.core.enforce_enrollment import check_certificate_eligible
from portal.core.errors import BusinessRuleError, DuplicateRecordError, ErrorContext
from portal.core.token_metadata import certificate_token_uri
from portal.infrastructure.chain_client import ChainClient, ChainReceipt
from portal.models.certificate import Certificate
from portal.models.course import Course
from portal.schemas.actions import CertificateRequest
from portal.services.dual_write import record_dual_write
from portal.services.handle_enrollment import find_registration
from portal.services.lookups import get_or_404, get_user_with_identity, resolve_wallet


async def find_certificate(
    db: AsyncSession, user_id: int, course_id: int,
) -> Certificate | None:
    result = await db.execute(
        select(Certificate)
        .where(Certificate.user_id == user_id)
        .where(Certificate.course_id == course_id)
    )
    return result.scalars().first()


class CertificateHandlers:
    """Graduation certificate minting for completed registrations."""

    def __init__(self, db: AsyncSession, chain: ChainClient, settings: Settings):
        self.db = db
        self.chain = chain
        self.settings = settings

    async def issue_certificate(
        self, body: CertificateRequest,
    ) -> tuple[Certificate, ChainReceipt]:
        user = await get_user_with_identity(self.db, body.user_id)
        course = await get_or_404(self.db, Course, body.course_id, "Course")
        if await find_registration(self.db, user.user_id, course.course_id) is None:
            raise BusinessRuleError(
                f"User {user.user_id} is not registered for course {course.course_id}",
                "NOT_REGISTERED",
            )
        check_certificate_eligible(course.course_id, course.end_date, date.today())
        if await find_certificate(self.db, user.user_id, course.course_id):
            raise DuplicateRecordError(
                f"Certificate for course {course.course_id} already issued to user {user.user_id}",
            )
        student = resolve_wallet(body.student_address, user.wallet_address)
        token_uri = certificate_token_uri(
            self.settings.public_base_url, user.user_id, course.course_id,
        )

        certificate = Certificate(
            user_id=user.user_id,
            course_id=course.course_id,
            nft_certificate_uri=token_uri,
        )
        self.db.add(certificate)
        await self.db.flush()

        def apply(receipt: ChainReceipt) -> None:
            certificate.token_id = receipt.token_id
            certificate.transaction_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.CERTIFICATE, "issueCertificate", student, token_uri,
                context=ErrorContext(user_id=user.user_id),
            ),
            apply,
            action="issue_certificate",
            log_extra={"user_id": user.user_id, "course_id": course.course_id},
        )
        return certificate, receipt
