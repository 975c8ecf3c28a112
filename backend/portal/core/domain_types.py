"""Domain Types — enums and value types shared across the portal.

Invariants:
    - ContractName values are the Truffle artifact names (build/contracts/<value>.json)
    - TransactionType values are what the transactions.type column stores
    - GRADE_MIN/GRADE_MAX mirror the registrations CHECK constraint
"""

from decimal import Decimal
from enum import Enum
from typing import NewType


WalletAddress = NewType("WalletAddress", str)   # EIP-55 checksummed
TokenUri = NewType("TokenUri", str)

GRADE_MIN = 0
GRADE_MAX = 100

# Fallback fee (in ETH) for semesters created without an explicit amount
DEFAULT_SEMESTER_FEE = Decimal("0.05")


class ContractName(str, Enum):
    """Pre-deployed contracts consumed by address."""
    IDENTITY = "MyNFT"
    COURSE = "MyCourseReg"
    CERTIFICATE = "CertificateNFT"
    FEE = "FeePaymentNFT"
    AMENITIES = "AmenitiesNFT"


class TransactionType(str, Enum):
    """Kinds of value transfers recorded in the transactions table."""
    FEE_PAYMENT = "fee_payment"
